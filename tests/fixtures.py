"""
Test Fixtures

Common test classes and functions used across test modules.
They live at module level so they can be located by qualified name.
"""

from abc import ABC, abstractmethod
from typing import Annotated, Any, Optional, Protocol


class Database:
    """Test database class"""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Test cache service"""

    def __init__(self):
        self.cache = {}


class UserRepository:
    """Test repository with dependencies"""

    def __init__(self, db: Database, cache: CacheService):
        self.db = db
        self.cache = cache


class Transport(ABC):
    """Interface without a default implementation"""

    @abstractmethod
    def send(self, message: str) -> str:
        ...


class SmtpTransport(Transport):
    def send(self, message: str) -> str:
        return f"smtp:{message}"


class Mailer:
    """Interface-typed dependency plus an optional scalar"""

    def __init__(self, transport: Transport, retries: int = 3):
        self.transport = transport
        self.retries = retries


class ServiceWithDefaults:
    """Typed, optional untyped, then typed (keyword-only) parameter"""

    def __init__(self, db: Database, limit=5, *, cache: CacheService):
        self.db = db
        self.limit = limit
        self.cache = cache


class ServiceWithScalar:
    """Required scalar parameter - cannot be guessed"""

    def __init__(self, db: Database, retries: int):
        self.db = db
        self.retries = retries


class NeedsScalarService:
    """Depends on an entry that cannot be resolved"""

    def __init__(self, service: ServiceWithScalar):
        self.service = service


class DashboardService:
    """Two levels above the unresolvable entry"""

    def __init__(self, needs: NeedsScalarService):
        self.needs = needs


class Notifier(Protocol):
    def notify(self, message: str) -> str:
        ...


class EmailNotifier:
    def notify(self, message: str) -> str:
        return f"email: {message}"


class AlertService:
    """Depends on a Protocol"""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier


class ServiceWithOptionalDependency:
    """Optional class-typed parameter"""

    def __init__(self, db: Database, cache: Optional[CacheService] = None):
        self.db = db
        self.cache = cache


class ServiceWithAnnotatedDependency:
    def __init__(self, db: Annotated[Database, "primary"], *args, **kwargs):
        self.db = db
        self.args = args
        self.kwargs = kwargs


class ServiceWithoutHint:
    """Service with missing type hint"""

    def __init__(self, dependency):
        self.dependency = dependency


class NoConstructor:
    """Class without __init__"""
    pass


class Configurable:
    """Target of property and method injections"""

    def __init__(self):
        self.cache = None
        self.label = None
        self.calls = []

    def set_database(self, db: Database, label: str = "none"):
        self.calls.append((db, label))


class FailingService:
    """Constructor raising a business error"""

    def __init__(self, db: Database):
        raise RuntimeError("boom")


class CircularA:
    def __init__(self, b: "CircularB"):
        self.b = b


class CircularB:
    def __init__(self, a: CircularA):
        self.a = a


class ReportBuilder:
    """Class with instance, static and class methods"""

    def __init__(self, db: Database):
        self.db = db

    def build(self, cache: CacheService, title: str = "Report") -> dict:
        return {"builder": self, "cache": cache, "title": title}

    @staticmethod
    def create(db: Database) -> "ReportBuilder":
        return ReportBuilder(db)

    @classmethod
    def from_parts(cls, db: Database, title: str = "Report") -> tuple:
        return cls, db, title


class Greeter:
    """Invocable object"""

    def __call__(self, db: Database, greeting: str = "hello") -> str:
        return f"{greeting} {db.name}"


def make_repository(db: Database, cache: CacheService) -> UserRepository:
    return UserRepository(db, cache)


def describe(db: Database, label: str, suffix: str = "!") -> str:
    return f"{db.name}:{label}{suffix}"


def positional_only(db: Database, count=1, scale=2, /, label="x") -> tuple:
    return db, count, scale, label


def failing_function(db: Database):
    raise ValueError("business failure")


def takes_any(value: Any):
    return value
