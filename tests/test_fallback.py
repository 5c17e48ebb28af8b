# ============================================================================
# DEFAULT APPLICATION FALLBACK TESTS
# ============================================================================
# STATUS: Tests - Default and implicit default registrations
# PURPOSE: Verify DefaultApplicationFallback handling
# ============================================================================
"""
Default Application Fallback Tests

Run with:
    pytest tests/test_fallback.py -v
"""

import logging

from core.config import InitializerDefaults
from core.contracts import (
    AnnotationType,
    CONTAINER_CLASS_NAME,
    DEFAULT_APPLICATION_NAME,
    LEGACY_CONTAINER_CLASS_NAME,
)
from core.models import Registration, TypeDescriptor
from host.context import HostContext, get_stored_resource_config
from host.directory import InMemoryRegistrationDirectory
from initializer.engine import ResolutionEngine
from initializer.fallback import DefaultApplicationFallback


# ============================================================================
# HELPERS
# ============================================================================

ORDERS = TypeDescriptor(name="shop.OrderResource", annotations=frozenset({AnnotationType.PATH}))
ERRORS = TypeDescriptor(name="shop.ErrorMapper", annotations=frozenset({AnnotationType.PROVIDER}))
APP_CLASSES = [ORDERS, ERRORS]


def _context(servlets=(), params=None):
    return HostContext(
        directory=InMemoryRegistrationDirectory(servlets=servlets),
        init_parameters=dict(params or {}),
    )


def _fallback(context):
    return DefaultApplicationFallback(context, defaults=InitializerDefaults())


# ============================================================================
# DEFAULT APPLICATION REGISTRATION
# ============================================================================

class TestDefaultRegistration:
    """Registration named DEFAULT_APPLICATION_NAME."""

    def test_declared_class_gets_stored_config(self):
        context = _context(
            servlets=[Registration(
                name=DEFAULT_APPLICATION_NAME,
                class_name=CONTAINER_CLASS_NAME,
                init_parameters={"mode": "registration", "level": "1"},
                mappings=["/api/*"],
            )],
            params={"mode": "context"},
        )

        configured = _fallback(context).apply(APP_CLASSES, claimed=set())

        config = get_stored_resource_config(context, DEFAULT_APPLICATION_NAME)
        assert configured == [DEFAULT_APPLICATION_NAME]
        assert config.application is None
        assert config.application_name == DEFAULT_APPLICATION_NAME
        assert config.classes == (ORDERS, ERRORS)
        assert config.properties == {"mode": "context", "level": "1"}

    def test_name_only_bound_to_container(self, caplog):
        context = _context(servlets=[
            Registration(name=DEFAULT_APPLICATION_NAME, mappings=["/*"]),
        ])

        with caplog.at_level(logging.INFO):
            _fallback(context).apply(APP_CLASSES, claimed=set())

        registration = context.directory.get_servlet_registration(DEFAULT_APPLICATION_NAME)
        assert registration.class_name == CONTAINER_CLASS_NAME
        assert registration.load_on_startup == 1
        assert registration.async_supported is False
        assert registration.instance.resource_config.classes == (ORDERS, ERRORS)
        assert get_stored_resource_config(context, DEFAULT_APPLICATION_NAME) is None
        assert any("with classes" in r.getMessage() for r in caplog.records)

    def test_name_only_without_mapping_warns(self, caplog):
        context = _context(servlets=[Registration(name=DEFAULT_APPLICATION_NAME)])

        _fallback(context).apply(APP_CLASSES, claimed=set())

        registration = context.directory.get_servlet_registration(DEFAULT_APPLICATION_NAME)
        assert registration.class_name == CONTAINER_CLASS_NAME
        assert registration.mappings == []
        assert any(
            r.levelno == logging.WARNING and "no servlet mapping" in r.getMessage()
            for r in caplog.records
        )

    def test_absent_is_noop(self):
        context = _context()
        assert _fallback(context).apply(APP_CLASSES, claimed=set()) == []
        assert context.attributes == {}


# ============================================================================
# IMPLICIT DEFAULT REGISTRATIONS
# ============================================================================

class TestImplicitDefault:
    """Container-class registrations without init parameters."""

    def test_canonical_container_class(self):
        context = _context(
            servlets=[Registration(name="plain", class_name=CONTAINER_CLASS_NAME)],
            params={"currency": "EUR"},
        )

        configured = _fallback(context).apply(APP_CLASSES, claimed=set())

        config = get_stored_resource_config(context, "plain")
        assert configured == ["plain"]
        assert config.classes == (ORDERS, ERRORS)
        assert config.properties == {"currency": "EUR"}

    def test_legacy_container_class(self):
        context = _context(servlets=[
            Registration(name="legacy", class_name=LEGACY_CONTAINER_CLASS_NAME),
        ])

        _fallback(context).apply(APP_CLASSES, claimed=set())

        assert get_stored_resource_config(context, "legacy").classes == (ORDERS, ERRORS)

    def test_claimed_skipped(self):
        context = _context(servlets=[Registration(name="plain", class_name=CONTAINER_CLASS_NAME)])

        _fallback(context).apply(APP_CLASSES, claimed={"plain"})

        assert get_stored_resource_config(context, "plain") is None

    def test_with_init_parameters_skipped(self):
        context = _context(servlets=[Registration(
            name="tuned",
            class_name=CONTAINER_CLASS_NAME,
            init_parameters={"trace": "on"},
        )])

        _fallback(context).apply(APP_CLASSES, claimed=set())

        assert get_stored_resource_config(context, "tuned") is None

    def test_other_implementation_skipped(self):
        context = _context(servlets=[Registration(name="files", class_name="host.StaticFiles")])

        _fallback(context).apply(APP_CLASSES, claimed=set())

        assert get_stored_resource_config(context, "files") is None

    def test_same_config_as_named_default(self):
        context = _context(servlets=[
            Registration(name=DEFAULT_APPLICATION_NAME, class_name=CONTAINER_CLASS_NAME),
            Registration(name="plain", class_name=CONTAINER_CLASS_NAME),
        ])

        configured = _fallback(context).apply(APP_CLASSES, claimed=set())

        named = get_stored_resource_config(context, DEFAULT_APPLICATION_NAME)
        implicit = get_stored_resource_config(context, "plain")
        assert configured == [DEFAULT_APPLICATION_NAME, "plain"]
        assert named.classes == implicit.classes
        assert named.properties == implicit.properties


# ============================================================================
# THROUGH THE ENGINE
# ============================================================================

class TestFallbackThroughEngine:

    def test_zero_classes(self):
        context = _context()

        result = ResolutionEngine(context, defaults=InitializerDefaults()).resolve([])

        assert context.directory.list_servlet_registrations() == {}
        assert result.claimed == set()
        assert result.defaults == []

    def test_zero_classes_with_default_registration(self):
        context = _context(servlets=[
            Registration(name=DEFAULT_APPLICATION_NAME, mappings=["/*"]),
        ])

        result = ResolutionEngine(context, defaults=InitializerDefaults()).resolve([])

        registration = context.directory.get_servlet_registration(DEFAULT_APPLICATION_NAME)
        assert list(context.directory.list_servlet_registrations()) == [DEFAULT_APPLICATION_NAME]
        assert registration.instance.resource_config.classes == ()
        assert result.defaults == [DEFAULT_APPLICATION_NAME]

    def test_application_with_provider_marker_published_by_default(self):
        providing = TypeDescriptor(
            name="shop.ProvidingApplication",
            supertypes=frozenset({DEFAULT_APPLICATION_NAME}),
            annotations=frozenset({AnnotationType.PROVIDER}),
        )
        context = _context(servlets=[Registration(name="plain", class_name=CONTAINER_CLASS_NAME)])

        ResolutionEngine(context, defaults=InitializerDefaults()).resolve([providing, ORDERS])

        config = get_stored_resource_config(context, "plain")
        assert config.classes == (providing, ORDERS)
