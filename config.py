from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LoginConfig(BaseSettings):
    """Configuration for LinkedIn login credentials."""

    email: str = Field("", validation_alias="LINKEDIN_EMAIL")
    password: str = Field("", validation_alias="LINKEDIN_PASSWORD")


class SessionConfig(BaseSettings):
    """Configuration for user session data."""

    user_data_dir: Path = Path("./linkedin_session")


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    log_file_path: Optional[Path] = Path("./logs/application.log")


class AnswersConfig(BaseSettings):
    """Backing files and thresholds of the question-answer memory."""

    free_text_path: Path = Path("answers.json")
    binary_path: Path = Path("binary_response.json")
    single_choice_path: Path = Path("dropdown_response.json")
    vocabulary_path: Optional[Path] = None  # YAML with `keywords` / `prefixes`
    acceptance_floor: float = 0.4
    reuse_threshold: float = 0.7
    keyword_boost: float = 1.2

    @field_validator("acceptance_floor", "reuse_threshold")
    @classmethod
    def threshold_not_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("thresholds must not be negative")
        return v

    @field_validator("keyword_boost")
    @classmethod
    def boost_at_least_one(cls, v: float) -> float:
        if v < 1.0:
            raise ValueError("keyword_boost must be >= 1.0")
        return v

    @model_validator(mode="after")
    def floor_below_reuse(self) -> "AnswersConfig":
        if self.acceptance_floor > self.reuse_threshold:
            raise ValueError(
                f"acceptance_floor ({self.acceptance_floor}) must not exceed "
                f"reuse_threshold ({self.reuse_threshold})"
            )
        return self


class ResolverConfig(BaseSettings):
    """How long and how often to wait for the operator on unknown questions."""

    binary_poll_interval: float = 1.0  # seconds
    dropdown_poll_interval: float = 0.5  # seconds
    operator_timeout: float = 300.0  # seconds
    unset_option_label: str = "Select an option"


class ConfirmationConfig(BaseSettings):
    """Retry settings for dismissing the post-submission dialog."""

    max_attempts: int = 10
    backoff_seconds: float = 1.0


class JobSearchConfig(BaseSettings):
    """Parameters for job searching."""

    keywords: str = "software"
    max_jobs_per_run: int = 25

    model_config = SettingsConfigDict(validate_assignment=True)


class FormDataConfig(BaseSettings):
    """Static contact data for the first step of the Easy Apply form."""

    email: str = Field("", validation_alias="CONTACT_EMAIL")
    phone: str = Field("", validation_alias="PHONE")
    cv_path: Optional[Path] = Field(None, validation_alias="CV_PATH")


class GeneralSettingsConfig(BaseSettings):
    """Other general settings for the bot."""

    browser_headless: bool = False
    should_submit: bool = False
    max_form_steps: int = 8
    wait_after_search_ms: int = 5000
    wait_between_steps_ms: int = 3000


class PerformanceConfig(BaseSettings):
    """Timeout settings."""

    selector_timeout: int = 5000  # ms
    login_timeout: int = 300000  # ms, time left to the operator for 2FA/captcha


class AppConfig(BaseSettings):
    """Root configuration class for the application."""

    login: LoginConfig = LoginConfig()
    session: SessionConfig = SessionConfig()
    logging: LoggingConfig = LoggingConfig()
    answers: AnswersConfig = AnswersConfig()
    resolver: ResolverConfig = ResolverConfig()
    confirmation: ConfirmationConfig = ConfirmationConfig()
    job_search: JobSearchConfig = JobSearchConfig()
    form_data: FormDataConfig = FormDataConfig()
    general_settings: GeneralSettingsConfig = GeneralSettingsConfig()
    performance: PerformanceConfig = PerformanceConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate the main config object
config = AppConfig()
