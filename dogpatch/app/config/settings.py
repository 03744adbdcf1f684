from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    base_url: str = Field(
        "https://dogpatchserver.herokuapp.com/api/v1/",
        validation_alias="DOGPATCH_BASE_URL",
    )

    connect_timeout_seconds: float = Field(5.0, validation_alias="DOGPATCH_CONNECT_TIMEOUT_SECONDS")
    read_timeout_seconds: float = Field(15.0, validation_alias="DOGPATCH_READ_TIMEOUT_SECONDS")
    transport_max_workers: int = Field(4, validation_alias="DOGPATCH_TRANSPORT_MAX_WORKERS")
    user_agent: str = Field("", validation_alias="DOGPATCH_USER_AGENT")

    # inline | serial | event_loop
    response_queue_backend: str = Field("serial", validation_alias="DOGPATCH_RESPONSE_QUEUE_BACKEND")
    response_queue_label: str = Field("dogpatch-response", validation_alias="DOGPATCH_RESPONSE_QUEUE_LABEL")

    # How long main() waits for the outcome; the request itself has no overall deadline.
    fetch_timeout_seconds: float = Field(30.0, validation_alias="DOGPATCH_FETCH_TIMEOUT_SECONDS")
    log_level: str = Field("INFO", validation_alias="DOGPATCH_LOG_LEVEL")
