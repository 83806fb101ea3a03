"""Runtime settings for the engine and its hosts.

Uses Pydantic BaseSettings to read environment variables with the
`DUI_` prefix. Command-line flags take precedence over these values.

Example:
    export DUI_DEFAULT_APP=path/to/my_app.yml
    export DUI_SERVER_PORT=8080
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings read from environment variables.

    Attributes:
        default_app: Bundled app name or YAML path opened when none is given.
        log_dir: Directory for rotated log files.
        log_level: Lowest level written to the log file.
        log_rotation: When a new log file is started (loguru rotation).
        log_retention: How long old log files are kept (loguru retention).
        server_name: Interface the window host binds to.
        server_port: Port the window host listens on.
        inbrowser: Open the window in the default browser on launch.
        theme_path: Optional YAML file with a console theme.
    """

    model_config = SettingsConfigDict(env_prefix="DUI_")

    default_app: str = "counter"
    log_dir: str = "logs"
    log_level: str = "DEBUG"
    log_rotation: str = "00:00"
    log_retention: str = "7 days"
    server_name: str = "127.0.0.1"
    server_port: int = 7860
    inbrowser: bool = True
    theme_path: Optional[str] = None


settings = Settings()
