from pydantic_settings import BaseSettings, SettingsConfigDict


class QueryBuilderBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SQB_",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def get_env_prefix(cls) -> str:
        """Get the environment variable prefix for this settings class.

        Returns:
            str: Environment variable prefix shared by all builder settings
        """
        return cls.model_config.get("env_prefix", "")
