"""Pydantic models for environment variable validation."""

from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticCustomError

PUBLIC_PREFIX = "NEXT_PUBLIC_"

EmailProvider = Literal["resend", "nodemailer", "sendgrid", "ses"]
NodeEnv = Literal["development", "production", "test"]

_url_adapter = TypeAdapter(AnyUrl)
_email_adapter = TypeAdapter(EmailStr)


def _blank_to_none(value: Any) -> Any:
    """Treat an empty string the same as an unset variable."""
    if value == "":
        return None
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    # Only the format is checked; the original string is kept as written.
    if value is None:
        return value
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("invalid_url", "Value must be an absolute URL")
    return value


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("invalid_email", "Value must be a valid email address")
    return value


def _parse_bool_literal(value: Any) -> Any:
    """Accept only the literals 'true' and 'false'."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    raise PydanticCustomError("invalid_boolean", "Value must be 'true' or 'false'")


RequiredStr = Annotated[str, Field(min_length=1)]
RequiredUrl = Annotated[str, Field(min_length=1), AfterValidator(_check_url)]
OptionalStr = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
OptionalUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_url)]
OptionalEmail = Annotated[
    Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_email)
]
BoolString = Annotated[bool, BeforeValidator(_parse_bool_literal)]


class SiteEnv(BaseModel):
    """Validated site configuration read from environment variables."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Site
    site_name: RequiredStr = Field(..., alias="NEXT_PUBLIC_SITE_NAME", description="Site name/title")
    site_url: RequiredUrl = Field(..., alias="NEXT_PUBLIC_SITE_URL", description="Site base URL")
    site_description: OptionalStr = Field(
        default=None, alias="NEXT_PUBLIC_SITE_DESCRIPTION", description="Site description"
    )

    # Hashnode
    hashnode_publication_id: OptionalStr = Field(
        default=None, alias="NEXT_PUBLIC_HASHNODE_PUBLICATION_ID", description="Hashnode publication ID"
    )
    hashnode_api_key: OptionalStr = Field(
        default=None, alias="HASHNODE_API_KEY", description="Hashnode API key for blog data"
    )

    # Email
    email_provider: EmailProvider = Field(
        default="resend", alias="EMAIL_PROVIDER", description="Email service provider"
    )
    contact_email: OptionalEmail = Field(
        default=None, alias="CONTACT_EMAIL", description="Destination for contact form"
    )
    resend_from_email: OptionalEmail = Field(
        default=None, alias="RESEND_FROM_EMAIL", description="From email for Resend"
    )
    resend_api_key: OptionalStr = Field(default=None, alias="RESEND_API_KEY", description="Resend API key")

    # SMTP (nodemailer fallback)
    smtp_host: OptionalStr = Field(default="localhost", alias="SMTP_HOST", description="SMTP host")
    smtp_port: OptionalStr = Field(default="465", alias="SMTP_PORT", description="SMTP port")
    smtp_secure: BoolString = Field(default=True, alias="SMTP_SECURE", description="Use TLS for SMTP")
    smtp_user: OptionalStr = Field(default=None, alias="SMTP_USER", description="SMTP username")
    smtp_pass: OptionalStr = Field(default=None, alias="SMTP_PASS", description="SMTP password")

    # Analytics and verification
    gtm_id: OptionalStr = Field(default=None, alias="NEXT_PUBLIC_GTM_ID", description="Google Tag Manager ID")
    ahrefs_key: OptionalStr = Field(
        default=None, alias="NEXT_PUBLIC_AHREFS_KEY", description="Ahrefs verification key"
    )
    google_site_verification: OptionalStr = Field(
        default=None, alias="NEXT_PUBLIC_GOOGLE_SITE_VERIFICATION", description="Google site verification"
    )
    dmca_verification: OptionalStr = Field(
        default=None, alias="NEXT_PUBLIC_DMCA_VERIFICATION", description="DMCA verification"
    )

    # Social links
    github_url: OptionalUrl = Field(default=None, alias="NEXT_PUBLIC_GITHUB_URL")
    twitter_url: OptionalUrl = Field(default=None, alias="NEXT_PUBLIC_TWITTER_URL")
    linkedin_url: OptionalUrl = Field(default=None, alias="NEXT_PUBLIC_LINKEDIN_URL")
    youtube_url: OptionalUrl = Field(default=None, alias="NEXT_PUBLIC_YOUTUBE_URL")
    instagram_url: OptionalUrl = Field(default=None, alias="NEXT_PUBLIC_INSTAGRAM_URL")
    facebook_url: OptionalUrl = Field(default=None, alias="NEXT_PUBLIC_FACEBOOK_URL")
    twitter_handle: OptionalStr = Field(default=None, alias="NEXT_PUBLIC_TWITTER_HANDLE")

    # API security
    hashnode_revalidate_webhook_secret: OptionalStr = Field(
        default=None,
        alias="HASHNODE_REVALIDATE_WEBHOOK_SECRET",
        description="Secret for Hashnode webhook revalidation",
    )

    # Application
    node_env: NodeEnv = Field(default="production", alias="NODE_ENV", description="Runtime mode")

    @classmethod
    def env_var_names(cls) -> tuple:
        """Return every recognised environment variable name, in schema order."""
        return tuple(field.alias for field in cls.model_fields.values())

    def is_production(self) -> bool:
        return self.node_env == "production"


class PublicSiteEnv(BaseModel):
    """Subset of SiteEnv that is safe to expose to client code."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    site_name: str = Field(..., alias="NEXT_PUBLIC_SITE_NAME")
    site_url: str = Field(..., alias="NEXT_PUBLIC_SITE_URL")
    site_description: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_SITE_DESCRIPTION")
    hashnode_publication_id: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_HASHNODE_PUBLICATION_ID")
    gtm_id: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_GTM_ID")
    ahrefs_key: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_AHREFS_KEY")
    github_url: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_GITHUB_URL")
    twitter_url: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_TWITTER_URL")
    linkedin_url: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_LINKEDIN_URL")
    youtube_url: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_YOUTUBE_URL")
    instagram_url: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_INSTAGRAM_URL")
    facebook_url: Optional[str] = Field(default=None, alias="NEXT_PUBLIC_FACEBOOK_URL")

    @classmethod
    def from_env(cls, env: SiteEnv) -> "PublicSiteEnv":
        """
        Project a validated SiteEnv onto the public fields.

        Args:
            env: Validated site configuration

        Returns:
            PublicSiteEnv carrying the same values, absent ones included
        """
        return cls.model_validate(env.model_dump(include=set(cls.model_fields)))

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Return the public values keyed by environment variable name."""
        return self.model_dump(by_alias=True)
