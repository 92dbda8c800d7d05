"""
Dynaconf settings for the Sweagle build step.

Keys (config/settings.toml, secrets in config/.secrets.toml, overridable from
the environment with '__' nesting, e.g. SWEAGLE__API_TOKEN):

    logging.level      root log level for the CLI
    sweagle.url        tenant base URL, unless --url is given
    sweagle.api_token  bearer token, unless --token is given
    sweagle.timeout    per-request timeout in seconds
    upload.encoding    encoding of workspace files sent by `upload`
"""

from pathlib import Path
from dynaconf import Dynaconf, Validator

PROJECT_ROOT = Path(__file__).parent.parent

settings = Dynaconf(
    root_path=PROJECT_ROOT,
    settings_files=["config/settings.toml"],
    secrets=["config/.secrets.toml"],
    envvar_prefix=False,
    validators=[
        Validator("logging.level", default="INFO"),
        Validator("sweagle.url", default=""),
        Validator("sweagle.timeout", default=30, gt=0),
        Validator("upload.encoding", default="utf-8"),
    ],
)
