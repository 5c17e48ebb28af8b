# ============================================================================
# APPLICATION BASE TYPE & MARKERS
# ============================================================================
# STATUS: Core - Declaration surface for deployable applications
# PURPOSE: Application base class plus @path / @provider / @application_path
# ============================================================================
"""
Application Declarations

Application code declares what the initializer should deploy:

    @application_path("shop")
    class ShopApplication(Application):
        pass

    @path("orders")
    class OrderResource:
        router = APIRouter()

    @provider
    class JsonErrorMapper:
        ...

Markers are set on the class itself and are not inherited by subclasses.
"""

from typing import Callable, Tuple, Type, TypeVar

T = TypeVar("T", bound=type)

PATH_ATTRIBUTE = "__resource_path__"
PROVIDER_ATTRIBUTE = "__resource_provider__"
APPLICATION_PATH_ATTRIBUTE = "__application_path__"


class Application:
    """
    Base type for deployable applications.

    Subclasses may list the resource and provider classes they publish in
    ``classes``. When empty, every discovered resource and provider is
    published.
    """

    classes: Tuple[type, ...] = ()


def path(value: str) -> Callable[[T], T]:
    """Mark a class as a root resource served under ``value``."""
    def decorator(cls: T) -> T:
        setattr(cls, PATH_ATTRIBUTE, value)
        return cls
    return decorator


def provider(cls: T) -> T:
    """Mark a class as an extension provider."""
    setattr(cls, PROVIDER_ATTRIBUTE, True)
    return cls


def application_path(value: str) -> Callable[[Type[Application]], Type[Application]]:
    """Declare the base URL path an Application subclass is deployed at."""
    def decorator(cls: Type[Application]) -> Type[Application]:
        setattr(cls, APPLICATION_PATH_ATTRIBUTE, value)
        return cls
    return decorator


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = [
    "Application",
    "path",
    "provider",
    "application_path",
    "qualified_name",
    "PATH_ATTRIBUTE",
    "PROVIDER_ATTRIBUTE",
    "APPLICATION_PATH_ATTRIBUTE",
]
