from __future__ import annotations

import logging
from typing import Any, Iterator

from testproxy.comparison import Operand, Plain, operand, null_safe_equals
from testproxy.configuration import configuration
from testproxy.proxy import InstanceProxy, ArgumentException

class ProxyAssertionError(AssertionError):
    """
    Raised by ProxyAssert. As an AssertionError it is reported as a test failure by unittest and pytest.
    """
    def __init__(self, message: str, property_name: str, expected: Any, actual: Any):
        super().__init__(message)

        self.property_name = property_name
        self.expected = expected
        self.actual = actual

class ProxyAssert:
    """
    Verifies conditions in unit tests using true/false propositions about proxied and non-proxied objects.
    The objects are compared property by property, either all public and non-public properties of the
    actual object or the explicitly specified ones.
    """
    logger = logging.getLogger(__name__)

    # internal

    @classmethod
    def _operands(cls, expected: InstanceProxy, actual: Any) -> tuple[Operand, Operand]:
        if not isinstance(expected, InstanceProxy):
            raise ArgumentException("expected", f"expected must be an InstanceProxy, got {type(expected).__name__}.")

        if actual is None:
            raise ArgumentException("actual", "actual is None.")

        return operand(expected), operand(actual)

    @classmethod
    def _values(cls, expected: Operand, actual: Operand, properties: tuple[str, ...]) -> Iterator[tuple[str, Any, Any, bool]]:
        names = list(properties) if properties else actual.property_names()

        for name in names:
            a = expected.read(name)
            b = actual.read(name)

            yield name, a, b, null_safe_equals(a, b)

    @classmethod
    def _inverted(cls, actual: Operand) -> bool:
        # the proxy-vs-plain checks of earlier releases failed under the opposite condition
        return isinstance(actual, Plain) and configuration().get("assertions.legacy_semantics", bool, False)

    # public

    @classmethod
    def are_equal(cls, expected: InstanceProxy, actual: Any, *properties: str) -> None:
        """
        Verify that a proxied object is equal to another object, proxied or not, by comparing the
        specified properties. The assertion fails at the first property whose values differ.

        Args:
            expected: the object the unit test expects, proxied by an InstanceProxy
            actual: the object the unit test produced, an InstanceProxy or a plain object
            *properties: the properties to compare. If none are given, all public and non-public
                properties of `actual` are compared.

        Raises:
            ProxyAssertionError: `expected` is not equal to `actual`
        """
        expected, actual = cls._operands(expected, actual)
        inverted = cls._inverted(actual)

        for name, a, b, equal in cls._values(expected, actual, properties):
            if equal == inverted:
                ProxyAssert.logger.debug(f"are_equal failed at {name}")
                raise ProxyAssertionError(f"ProxyAssert.are_equal failed at property '{name}'. Expected:<{a}>. Actual:<{b}>.", name, a, b)

    @classmethod
    def are_not_equal(cls, not_expected: InstanceProxy, actual: Any, *properties: str) -> None:
        """
        Verify that a proxied object is not equal to another object, proxied or not, by comparing the
        specified properties. The assertion fails at the first property whose values are equal.

        Args:
            not_expected: the object the unit test expects not to match `actual`, proxied by an InstanceProxy
            actual: the object the unit test produced, an InstanceProxy or a plain object
            *properties: the properties to compare. If none are given, all public and non-public
                properties of `actual` are compared.

        Raises:
            ProxyAssertionError: `not_expected` is equal to `actual`
        """
        not_expected, actual = cls._operands(not_expected, actual)
        inverted = cls._inverted(actual)

        for name, a, b, equal in cls._values(not_expected, actual, properties):
            if equal != inverted:
                ProxyAssert.logger.debug(f"are_not_equal failed at {name}")
                raise ProxyAssertionError(f"ProxyAssert.are_not_equal failed at property '{name}'. Expected any value except:<{a}>. Actual:<{b}>.", name, a, b)
