"""Catalogue of everything a generated project can be built from.

Defines the enumerations for frameworks, package managers and the three
component categories (libraries, middleware, services), plus the identifier
normalizer that turns hyphenated catalogue keys into the camel-case form used
for registry keys and generated symbols.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Identifier normalization
# ---------------------------------------------------------------------------

_HYPHEN_LOWER = re.compile(r"-([a-z])")
_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_$]+")


def normalize(identifier: str) -> str:
    """Convert a hyphenated identifier to camel-case.

    Every ``-`` followed by a lowercase ASCII letter is replaced by that
    letter upper-cased; all other characters are left alone.  The transform
    is idempotent, so already camel-cased input comes back unchanged.

    Examples::

        normalize("express-rate-limit") -> "expressRateLimit"
        normalize("socket.io")          -> "socket.io"
        normalize("cookieParser")       -> "cookieParser"
    """
    return _HYPHEN_LOWER.sub(lambda m: m.group(1).upper(), identifier)


def symbol_name(identifier: str) -> str:
    """Return the PascalCase suffix used for the generated ``apply*`` symbol.

    The identifier is normalized first; characters that cannot appear in a
    JavaScript identifier are then dropped and the next letter upper-cased.

    Examples::

        symbol_name("cors")               -> "Cors"
        symbol_name("express-rate-limit") -> "ExpressRateLimit"
        symbol_name("socket.io")          -> "SocketIo"
    """
    parts = _NON_IDENTIFIER.split(normalize(identifier))
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def module_stem(identifier: str) -> str:
    """File name (without extension) of the generated module for *identifier*."""
    return identifier.lower()


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Supported backend frameworks."""
    EXPRESS = "express"

    @property
    def label(self) -> str:
        return _FRAMEWORK_LABELS[self]

    @classmethod
    def parse(cls, value: Union[str, "Framework"]) -> "Framework":
        """Accept the enum value or its display label, case-insensitively."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


_FRAMEWORK_LABELS: dict[Framework, str] = {Framework.EXPRESS: "Express"}


class PackageManager(str, Enum):
    """Package managers the install commands can target."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def install_verb(self) -> str:
        return {"npm": "install", "yarn": "add", "pnpm": "add"}[self.value]

    @property
    def dev_flag(self) -> str:
        return {"npm": "--save-dev", "yarn": "--dev", "pnpm": "--save-dev"}[self.value]


class Library(str, Enum):
    """Libraries wired into the application entry point."""
    MONGOOSE = "mongoose"
    SEQUELIZE = "sequelize"
    TYPEORM = "typeorm"
    SOCKET_IO = "socket.io"
    SWAGGER_UI_EXPRESS = "swagger-ui-express"


class Middleware(str, Enum):
    """Express middleware packages."""
    CORS = "cors"
    HELMET = "helmet"
    MORGAN = "morgan"
    EXPRESS_VALIDATOR = "express-validator"
    EXPRESS_SESSION = "express-session"
    COOKIE_PARSER = "cookie-parser"
    COMPRESSION = "compression"
    EXPRESS_RATE_LIMIT = "express-rate-limit"
    HPP = "hpp"
    CSURF = "csurf"
    EXPRESS_SLOW_DOWN = "express-slow-down"
    RESPONSE_TIME = "response-time"
    SERVE_FAVICON = "serve-favicon"
    METHOD_OVERRIDE = "method-override"
    CONNECT_TIMEOUT = "connect-timeout"
    EXPRESS_ASYNC_ERRORS = "express-async-errors"
    EXPRESS_FILEUPLOAD = "express-fileupload"
    EXPRESS_CACHE_CONTROLLER = "express-cache-controller"
    EXPRESS_HEALTHCHECK = "express-healthcheck"


class Service(str, Enum):
    """Third-party service integrations."""
    NODEMAILER = "nodemailer"
    SENDGRID = "sendgrid"
    MAILCHIMP = "mailchimp"
    JSONWEBTOKEN = "jsonwebtoken"
    BCRYPT = "bcrypt"
    PASSPORT = "passport"
    REDIS = "redis"


CatalogueEntry = Union[Library, Middleware, Service]


class Category(str, Enum):
    """Component categories of the content registry."""
    LIBRARY = "library"
    MIDDLEWARE = "middleware"
    SERVICE = "service"

    @property
    def members(self) -> type[Enum]:
        """The catalogue enum holding this category's identifiers."""
        return _CATEGORY_MEMBERS[self]

    @property
    def source_dir(self) -> str:
        """Directory under ``src/`` that receives this category's files."""
        return _SOURCE_DIRS[self]

    @property
    def content_dir(self) -> str:
        """Directory under ``boilercreate/content/`` holding template bodies."""
        return _CONTENT_DIRS[self]

    def resolve(self, identifier: Union[str, Enum]) -> Optional[CatalogueEntry]:
        """Map a hyphenated or camel-case identifier to its catalogue entry.

        Catalogue enum members are accepted as well; their value is used.
        Returns ``None`` when the identifier is not part of this category.
        """
        if isinstance(identifier, Enum):
            identifier = identifier.value
        return _NORMALIZED_INDEX[self].get(normalize(str(identifier).strip()))


_CATEGORY_MEMBERS: dict[Category, type[Enum]] = {
    Category.LIBRARY: Library,
    Category.MIDDLEWARE: Middleware,
    Category.SERVICE: Service,
}

_SOURCE_DIRS: dict[Category, str] = {
    Category.LIBRARY: "lib",
    Category.MIDDLEWARE: "middlewares",
    Category.SERVICE: "services",
}

_CONTENT_DIRS: dict[Category, str] = {
    Category.LIBRARY: "libraries",
    Category.MIDDLEWARE: "middlewares",
    Category.SERVICE: "services",
}

_NORMALIZED_INDEX: dict[Category, dict[str, CatalogueEntry]] = {
    category: {normalize(member.value): member for member in members}
    for category, members in _CATEGORY_MEMBERS.items()
}


# ---------------------------------------------------------------------------
# Display labels and environment variables
# ---------------------------------------------------------------------------

LABELS: dict[str, str] = {
    "mongoose": "Mongoose (MongoDB ODM)",
    "sequelize": "Sequelize (SQL ORM)",
    "typeorm": "TypeORM (TypeScript ORM)",
    "socket.io": "Socket.io (Real-time communication)",
    "swagger-ui-express": "Swagger UI Express (API documentation)",
    "cors": "CORS (Cross-Origin Resource Sharing)",
    "helmet": "Helmet (Security headers)",
    "morgan": "Morgan (HTTP request logger)",
    "express-validator": "Express Validator (Input validation)",
    "express-session": "Express Session (Session management)",
    "cookie-parser": "Cookie Parser (Parse cookies)",
    "compression": "Compression (Response compression)",
    "express-rate-limit": "Express Rate Limit (Rate limiting)",
    "hpp": "HPP (HTTP Parameter Pollution protection)",
    "csurf": "Csurf (CSRF protection)",
    "express-slow-down": "Express Slow Down (Rate limiting with slow down)",
    "response-time": "Response Time (X-Response-Time header)",
    "serve-favicon": "Serve Favicon (Serve favicon)",
    "method-override": "Method Override (HTTP method override)",
    "connect-timeout": "Connect Timeout (Request timeout handling)",
    "express-async-errors": "Express Async Errors (Async error forwarding)",
    "express-fileupload": "Express Fileupload (Multipart uploads)",
    "express-cache-controller": "Express Cache Controller (Cache-Control headers)",
    "express-healthcheck": "Express Healthcheck (Health endpoint)",
    "nodemailer": "Nodemailer (Email sending)",
    "sendgrid": "SendGrid (Email service)",
    "mailchimp": "Mailchimp (Email marketing)",
    "jsonwebtoken": "JSON Web Token (Authentication)",
    "bcrypt": "bcrypt (Password hashing)",
    "passport": "Passport (Authentication middleware)",
    "redis": "Redis (In-memory data store)",
}

# Variables each component's template reads from process.env.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "mongoose": ("MONGODB_URI",),
    "sequelize": ("DATABASE_URL",),
    "typeorm": ("DB_HOST", "DB_PORT", "DB_USERNAME", "DB_PASSWORD", "DB_NAME"),
    "socket.io": ("CLIENT_URL",),
    "express-session": ("SESSION_SECRET",),
    "cookie-parser": ("COOKIE_SECRET",),
    "nodemailer": ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS"),
    "sendgrid": ("SENDGRID_API_KEY", "SENDGRID_FROM_EMAIL"),
    "mailchimp": ("MAILCHIMP_API_KEY", "MAILCHIMP_SERVER_PREFIX"),
    "jsonwebtoken": ("JWT_SECRET", "JWT_EXPIRES_IN"),
    "passport": ("JWT_SECRET",),
    "redis": ("REDIS_URL",),
}

# Middleware whose template serves files from the static-asset directory.
STATIC_ASSET_MIDDLEWARE: frozenset[str] = frozenset({Middleware.SERVE_FAVICON.value})
STATIC_ASSET_DIR = "public"


def label_for(identifier: str) -> str:
    """Return the human-readable label for a catalogue identifier."""
    return LABELS.get(identifier, identifier)
