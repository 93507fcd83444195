import os
from pathlib import Path
from typing import Optional

import yaml

from prstatus_core.models import Credentials

DEFAULT_CONFIG: dict = {
    "provider": "bitbucket",
    "base_url": None,  # Bitbucket REST root, e.g. https://bitbucket.example.com/rest
    "project_slug": None,
    "repo_slug": None,
    "repo": None,  # GitHub owner/name
    "post_build": False,
    "events": "noop",  # noop | sqlite | log
    "events_path": ".prstatus.db",
    "timeout": 30,
}

PROVIDERS = ("bitbucket", "github")


def load_config(config_path: str = ".prstatus.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prstatus.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Credentials come from the environment only, never from the file.
    config["bitbucket_username"] = os.environ.get("BITBUCKET_USERNAME")
    config["bitbucket_password"] = os.environ.get("BITBUCKET_PASSWORD")
    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def missing_settings(config: dict) -> list[str]:
    """Return the names of settings the configured provider needs but lacks."""
    provider = config.get("provider")
    if provider not in PROVIDERS:
        raise ValueError(f"Unknown provider: {provider!r}. Choose 'bitbucket' or 'github'.")

    if provider == "github":
        required = {"repo": config.get("repo"), "GITHUB_TOKEN": config.get("github_token")}
    else:
        required = {
            "base_url": config.get("base_url"),
            "project_slug": config.get("project_slug"),
            "repo_slug": config.get("repo_slug"),
            "BITBUCKET_USERNAME": config.get("bitbucket_username"),
            "BITBUCKET_PASSWORD": config.get("bitbucket_password"),
        }
    return [name for name, value in required.items() if not value]


def bitbucket_credentials(config: dict) -> Credentials:
    return Credentials(username=config["bitbucket_username"], password=config["bitbucket_password"])
