"""Tests for restnav.registry -- namespace-scoped class lookup."""

from __future__ import annotations

import logging

import pytest

from restnav.exceptions import RestnavError, UnresolvedTypeError
from restnav.exit_codes import EXIT_RESOURCE_TREE_ERROR
from restnav.registry import TypeRegistry, registry


class _Widgets:
    pass


class _Widget:
    pass


class TestTypeRegistry:
    def test_register_and_resolve(self) -> None:
        reg = TypeRegistry()
        reg.register(_Widget)
        assert reg.resolve(__name__, "_Widget") is _Widget

    def test_register_returns_class(self) -> None:
        reg = TypeRegistry()
        assert reg.register(_Widget) is _Widget

    def test_explicit_namespace_and_name(self) -> None:
        reg = TypeRegistry()
        reg.register(_Widget, namespace="pkg.sms", name="Message")
        assert reg.resolve("pkg.sms", "Message") is _Widget
        assert ("pkg.sms", "Message") in reg

    def test_same_name_in_two_namespaces(self) -> None:
        reg = TypeRegistry()
        reg.register(_Widget, namespace="pkg.messages", name="Message")
        reg.register(_Widgets, namespace="pkg.sms", name="Message")
        assert reg.resolve("pkg.messages", "Message") is _Widget
        assert reg.resolve("pkg.sms", "Message") is _Widgets

    def test_missing_raises_unresolved(self) -> None:
        reg = TypeRegistry()
        with pytest.raises(UnresolvedTypeError) as exc_info:
            reg.resolve("pkg.calls", "Call")
        assert exc_info.value.namespace == "pkg.calls"
        assert exc_info.value.name == "Call"
        assert "pkg.calls" in str(exc_info.value)

    def test_unresolved_is_restnav_error(self) -> None:
        exc = UnresolvedTypeError("a", "B")
        assert isinstance(exc, RestnavError)
        assert exc.exit_code == EXIT_RESOURCE_TREE_ERROR

    def test_replacing_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        reg = TypeRegistry()
        reg.register(_Widget, namespace="ns", name="X")
        with caplog.at_level(logging.WARNING, logger="restnav.registry"):
            reg.register(_Widgets, namespace="ns", name="X")
        assert "Replacing" in caplog.text
        assert reg.resolve("ns", "X") is _Widgets

    def test_reregistering_same_class_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        reg = TypeRegistry()
        reg.register(_Widget)
        with caplog.at_level(logging.WARNING, logger="restnav.registry"):
            reg.register(_Widget)
        assert caplog.text == ""

    def test_unregister(self) -> None:
        reg = TypeRegistry()
        reg.register(_Widget)
        reg.register(_Widget, name="Alias")
        reg.unregister(_Widget)
        assert len(reg) == 0

    def test_iteration(self) -> None:
        reg = TypeRegistry()
        reg.register(_Widget)
        reg.register(_Widgets)
        assert set(reg) == {_Widget, _Widgets}


class TestGlobalRegistry:
    def test_declared_classes_register_themselves(self) -> None:
        from restnav.rest.sip import Domain, Domains

        assert registry.resolve("restnav.rest.sip", "Domains") is Domains
        assert registry.resolve("restnav.rest.sip", "Domain") is Domain

    def test_sms_and_messages_are_distinct(self) -> None:
        import restnav.rest.messages as messages
        import restnav.rest.sms as sms

        assert registry.resolve("restnav.rest.sms", "Message") is sms.Message
        assert registry.resolve("restnav.rest.messages", "Message") is messages.Message
        assert sms.Message is not messages.Message
