"""
authzgen exceptions.

Every error raised by the generator derives from AuthzGenError so the
batch driver can stop on the first failure and report it.
"""


class AuthzGenError(Exception):
    """Base exception for policy generation errors."""
    pass


class ConfigurationError(AuthzGenError):
    """Raised when generator options are invalid."""
    pass


class UnknownRuleKindError(ConfigurationError):
    """Raised when a rule option names a clause kind other than when/to/from."""

    def __init__(self, rule: str):
        self.rule = rule
        super().__init__(f"unknown rule kind: {rule}")


class InvalidOccurrenceError(ConfigurationError):
    """Raised when a clause occurrence count is negative."""

    def __init__(self, rule: str, occurrence: int):
        self.rule = rule
        self.occurrence = occurrence
        super().__init__(
            f"invalid occurrence for rule {rule}: {occurrence} (must be >= 0)"
        )


class UnsupportedActionError(ConfigurationError):
    """Raised when the policy action is neither ALLOW nor DENY."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"unsupported action: {action}")


class UnknownPolicyKindError(ConfigurationError):
    """Raised when the policy type is not a known security policy kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown policy kind: {kind}")


class UnimplementedPolicyKindError(AuthzGenError):
    """Raised for policy kinds that are recognized but cannot be generated yet."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unimplemented: {kind}")


class SerializationError(AuthzGenError):
    """Raised when a policy object cannot be serialized."""
    pass
