from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    app_name: str = 'Schul-Protokolle'
    app_env: str = 'local'
    app_timezone: str = 'Europe/Berlin'
    log_level: str = 'INFO'

    # Fallback connection used when no local store config has been saved yet.
    webdav_url: str = ''
    webdav_user: str = ''
    webdav_token: str = ''
    webdav_path: str = 'SchulKonfliktData'
    webdav_timeout_seconds: float = 20.0

    store_config_file: str = 'nc_config.json'
    settings_admin_password: str = '0000'


settings = Settings()
