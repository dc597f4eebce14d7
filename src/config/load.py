import os
import re
from pathlib import Path

import yaml

ENV_REF = re.compile(r'\$\{([^}]+)\}')
REQUIRED_KEYS = ("stackName",)


def load_config(app, config_dir="configs") -> dict:
    # read stage from cdk context or env var; default 'dev'
    stage = app.node.try_get_context("stage") or os.getenv("STAGE", "dev")
    config_path = Path(config_dir) / f"{stage}_config.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path, "r") as f:
        cfg_content = f.read()

    cfg = yaml.safe_load(substitute_env_vars(cfg_content)) or {}
    missing = [k for k in REQUIRED_KEYS if not cfg.get(k)]
    if missing:
        raise ValueError(f"{config_path} is missing required keys: {', '.join(missing)}")

    cfg["stage"] = stage
    return cfg


def substitute_env_vars(content: str) -> str:
    """
    Substitute environment variables in the format ${VAR_NAME} or ${VAR_NAME:default_value}
    """
    def replace_env_var(match):
        var_name, sep, default_value = match.group(1).partition(":")
        env_value = os.getenv(var_name.strip())
        if env_value is not None:
            return env_value
        if sep:
            return default_value.strip()
        raise ValueError(f"Environment variable '{var_name.strip()}' is required but not set")

    return ENV_REF.sub(replace_env_var, content)
