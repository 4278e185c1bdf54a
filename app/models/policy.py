"""Security header policy models and their header serialization."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SERVICE_NAME = "secure-origin"

# HSTS max-age is an unsigned 32-bit value.
MAX_HSTS_MAX_AGE = 2**32 - 1

CONTENT_TYPE_OPTIONS_HEADER = "X-Content-Type-Options"
FRAME_OPTIONS_HEADER = "X-Frame-Options"
XSS_PROTECTION_HEADER = "X-XSS-Protection"
HSTS_HEADER = "Strict-Transport-Security"
CSP_HEADER = "Content-Security-Policy"
REFERRER_POLICY_HEADER = "Referrer-Policy"
PERMISSIONS_POLICY_HEADER = "Permissions-Policy"
SERVER_HEADER = "Server"

# Canonical order of the headers produced by SecurityPolicy.to_header_map().
SECURITY_HEADER_NAMES = (
    CONTENT_TYPE_OPTIONS_HEADER,
    FRAME_OPTIONS_HEADER,
    XSS_PROTECTION_HEADER,
    HSTS_HEADER,
    CSP_HEADER,
    REFERRER_POLICY_HEADER,
    PERMISSIONS_POLICY_HEADER,
)


class HstsPolicy(BaseModel):
    """Strict-Transport-Security settings."""

    model_config = ConfigDict(frozen=True)

    max_age_seconds: int = Field(
        default=31_536_000,
        ge=0,
        le=MAX_HSTS_MAX_AGE,
        description="HSTS max-age in seconds (1 year)",
    )
    include_subdomains: bool = Field(
        default=True, description="Append the includeSubDomains token"
    )
    preload: bool = Field(default=True, description="Append the preload token")

    def header_value(self) -> str:
        """Render the header value, e.g. ``max-age=3600; preload``."""
        parts = [f"max-age={self.max_age_seconds}"]
        if self.include_subdomains:
            parts.append("includeSubDomains")
        if self.preload:
            parts.append("preload")
        return "; ".join(parts)


class CspPolicy(BaseModel):
    """Content-Security-Policy directives.

    Values are opaque source lists and are emitted verbatim.
    """

    model_config = ConfigDict(frozen=True)

    default: str = Field(default="'self'", description="default-src")
    script: str = Field(default="'self'", description="script-src")
    style: str = Field(default="'self' 'unsafe-inline'", description="style-src")
    img: str = Field(default="'self' data:", description="img-src")
    connect: str = Field(default="'self'", description="connect-src")
    font: str = Field(default="'self'", description="font-src")
    object: str = Field(default="'none'", description="object-src")
    media: str = Field(default="'self'", description="media-src")
    frame: str = Field(default="'none'", description="frame-src")
    child: str = Field(default="'none'", description="child-src")
    worker: str = Field(default="'none'", description="worker-src")
    base_uri: str = Field(default="'self'", description="base-uri")
    form_action: str = Field(default="'self'", description="form-action")

    def directives(self) -> list[tuple[str, str]]:
        """Return ``(directive, value)`` pairs in emission order."""
        return [
            ("default-src", self.default),
            ("script-src", self.script),
            ("style-src", self.style),
            ("img-src", self.img),
            ("connect-src", self.connect),
            ("font-src", self.font),
            ("object-src", self.object),
            ("media-src", self.media),
            ("frame-src", self.frame),
            ("child-src", self.child),
            ("worker-src", self.worker),
            ("base-uri", self.base_uri),
            ("form-action", self.form_action),
        ]

    def header_value(self) -> str:
        """Render all directives joined by ``"; "``."""
        return "; ".join(f"{name} {value}" for name, value in self.directives())


class SecurityPolicy(BaseModel):
    """Resolved security header policy for the lifetime of the process."""

    model_config = ConfigDict(frozen=True)

    content_type_options: str = Field(default="nosniff")
    frame_options: str = Field(default="DENY")
    xss_protection: str = Field(default="1; mode=block")
    hsts: HstsPolicy = Field(default_factory=HstsPolicy)
    csp: CspPolicy = Field(default_factory=CspPolicy)
    referrer_policy: str = Field(default="strict-origin-when-cross-origin")
    permissions_policy: str = Field(
        default="geolocation=(), microphone=(), camera=()"
    )
    server_identity: str = Field(
        default=DEFAULT_SERVICE_NAME, description="Value of the Server header"
    )

    @classmethod
    def defaults(cls, server_identity: str = DEFAULT_SERVICE_NAME) -> "SecurityPolicy":
        """Return the built-in policy, advertising ``server_identity``."""
        return cls(server_identity=server_identity)

    def hsts_header_value(self) -> str:
        return self.hsts.header_value()

    def csp_header_value(self) -> str:
        return self.csp.header_value()

    def to_header_map(self) -> dict[str, str]:
        """Map each security header name to its value.

        The Server header is left out: it is only set when the handler has not
        already provided one, while these are always overwritten.
        """
        return {
            CONTENT_TYPE_OPTIONS_HEADER: self.content_type_options,
            FRAME_OPTIONS_HEADER: self.frame_options,
            XSS_PROTECTION_HEADER: self.xss_protection,
            HSTS_HEADER: self.hsts_header_value(),
            CSP_HEADER: self.csp_header_value(),
            REFERRER_POLICY_HEADER: self.referrer_policy,
            PERMISSIONS_POLICY_HEADER: self.permissions_policy,
        }
