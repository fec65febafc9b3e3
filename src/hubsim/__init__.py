"""hubsim - stateful REST + GraphQL emulator of a hosted issue tracker."""

__version__ = "0.1.0"
