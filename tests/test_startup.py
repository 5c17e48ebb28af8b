# ============================================================================
# CONTAINER INITIALIZER TESTS
# ============================================================================
# STATUS: Tests - Startup sequence and container providers
# PURPOSE: Verify hook ordering, provider discovery and failure handling
# ============================================================================
"""
Container Initializer Tests

Run with:
    pytest tests/test_startup.py -v
"""

import pytest
from unittest.mock import MagicMock, patch

from core.config import InitializerDefaults
from core.contracts import (
    CONTAINER_CLASS_NAME,
    DEFAULT_APPLICATION_NAME,
    LEGACY_CONTAINER_CLASS_NAME,
)
from core.models import Registration, TypeDescriptor
from host.context import HostContext
from host.directory import InMemoryRegistrationDirectory, RegistrationError
from initializer.providers import (
    ContainerProvider,
    ContainerProviderRegistry,
    discover_container_providers,
)
from initializer.startup import ContainerInitializer, find_container_names


# ============================================================================
# HELPERS
# ============================================================================

SHOP = TypeDescriptor(
    name="shop.ShopApplication",
    supertypes=frozenset({DEFAULT_APPLICATION_NAME}),
    application_path="shop",
)


class RecordingProvider(ContainerProvider):
    """Records every hook call into a shared list."""

    def __init__(self, name, calls):
        self.name = name
        self.calls = calls

    def pre_init(self, context, classes):
        self.calls.append((self.name, "pre_init", set(find_container_names(context))))

    def post_init(self, context, classes, container_names):
        self.calls.append((self.name, "post_init", set(container_names)))

    def on_register(self, context, container_names):
        self.calls.append((self.name, "on_register", set(container_names)))


def _initializer(providers=()):
    providers = list(providers)
    return ContainerInitializer(
        provider_factory=lambda: providers,
        defaults=InitializerDefaults(),
    )


# ============================================================================
# STARTUP SEQUENCE
# ============================================================================

class TestOnStartup:

    def test_hook_groups_run_in_order(self):
        calls = []
        providers = [RecordingProvider("first", calls), RecordingProvider("second", calls)]
        context = HostContext()

        _initializer(providers).on_startup([SHOP], context)

        assert [(name, hook) for name, hook, _ in calls] == [
            ("first", "pre_init"),
            ("second", "pre_init"),
            ("first", "post_init"),
            ("second", "post_init"),
            ("first", "on_register"),
            ("second", "on_register"),
        ]
        # Resolution happens between pre_init and post_init
        assert calls[0][2] == set()
        assert calls[2][2] == {SHOP.name}
        assert calls[4][2] == {SHOP.name}

    def test_none_classes_treated_as_empty(self):
        provider = MagicMock(spec=ContainerProvider)
        context = HostContext()

        result = _initializer([provider]).on_startup(None, context)

        provider.pre_init.assert_called_once_with(context, [])
        provider.post_init.assert_called_once_with(context, [], set())
        provider.on_register.assert_called_once_with(context, set())
        assert result.claimed == set()

    def test_returns_and_keeps_result(self):
        initializer = _initializer()

        result = initializer.on_startup([SHOP], HostContext())

        assert result.mappings == {SHOP.name: "/shop/*"}
        assert initializer.last_result is result

    def test_provider_factory_called_per_run(self):
        factory = MagicMock(return_value=[])
        initializer = ContainerInitializer(provider_factory=factory, defaults=InitializerDefaults())

        initializer.on_startup([], HostContext())
        initializer.on_startup([], HostContext())

        assert factory.call_count == 2

    def test_registration_failure_aborts(self):
        class Rejecting(InMemoryRegistrationDirectory):
            def add_servlet(self, name, instance):
                raise RegistrationError("rejected")

        provider = MagicMock(spec=ContainerProvider)
        context = HostContext(directory=Rejecting())

        with pytest.raises(RegistrationError):
            _initializer([provider]).on_startup([SHOP], context)

        provider.pre_init.assert_called_once()
        provider.post_init.assert_not_called()
        provider.on_register.assert_not_called()


class TestFindContainerNames:

    def test_container_classes_only(self):
        context = HostContext(directory=InMemoryRegistrationDirectory(servlets=[
            Registration(name="canonical", class_name=CONTAINER_CLASS_NAME),
            Registration(name="legacy", class_name=LEGACY_CONTAINER_CLASS_NAME),
            Registration(name="files", class_name="host.StaticFiles"),
            Registration(name="unbound"),
        ]))

        assert find_container_names(context) == {"canonical", "legacy"}


# ============================================================================
# PROVIDERS
# ============================================================================

class TestContainerProviderRegistry:

    def test_registration_order(self):
        a, b = ContainerProvider(), ContainerProvider()
        registry = ContainerProviderRegistry([a, b])
        assert registry.get_all() == [a, b]
        assert list(registry) == [a, b]

    def test_duplicate_instance_ignored(self):
        a = ContainerProvider()
        registry = ContainerProviderRegistry([a, a])
        assert len(registry) == 1

    def test_register_class(self):
        registry = ContainerProviderRegistry()
        instance = registry.register_class(RecordingProvider, name="rec", calls=[])
        assert registry.get_all() == [instance]

    def test_default_hooks_do_nothing(self):
        provider = ContainerProvider()
        provider.pre_init(HostContext(), [])
        provider.post_init(HostContext(), [], set())
        provider.on_register(HostContext(), set())


def _entry_point(name, target):
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = target
    return ep


class TestDiscoverContainerProviders:

    @patch("initializer.providers.entry_points")
    def test_loads_classes_and_instances_in_name_order(self, mock_entry_points):
        instance = RecordingProvider("instance", [])
        mock_entry_points.return_value = [
            _entry_point("b-instance", instance),
            _entry_point("a-class", ContainerProvider),
        ]

        providers = discover_container_providers(group="test.group")

        mock_entry_points.assert_called_once_with(group="test.group")
        assert isinstance(providers[0], ContainerProvider)
        assert providers[1] is instance

    @patch("initializer.providers.entry_points")
    def test_rejects_non_provider(self, mock_entry_points):
        mock_entry_points.return_value = [_entry_point("bad", object())]

        with pytest.raises(TypeError, match="bad"):
            discover_container_providers(group="test.group")

    @patch("initializer.providers.entry_points")
    def test_none_installed(self, mock_entry_points):
        mock_entry_points.return_value = []
        assert discover_container_providers(group="test.group") == []

    @patch("initializer.providers.entry_points")
    def test_instance_advertised_twice_kept_once(self, mock_entry_points):
        instance = RecordingProvider("shared", [])
        mock_entry_points.return_value = [
            _entry_point("a-shared", instance),
            _entry_point("b-shared", instance),
        ]

        assert discover_container_providers(group="test.group") == [instance]

    def test_registry_as_provider_factory(self):
        calls = []
        registry = ContainerProviderRegistry([RecordingProvider("registered", calls)])
        initializer = ContainerInitializer(
            provider_factory=registry.get_all,
            defaults=InitializerDefaults(),
        )

        initializer.on_startup([SHOP], HostContext())

        assert [hook for _, hook, _ in calls] == ["pre_init", "post_init", "on_register"]
