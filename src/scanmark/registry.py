"""Token registry: the ordered set of descriptors a parser scans for.

Registration order is precedence. When two start probes match at the same
offset, the token registered first wins; there is no separate priority.

Thread Safety:
TokenRegistry is immutable after creation. Safe to share.
Use TokenRegistryBuilder for mutable construction.

Example:
    >>> builder = TokenRegistryBuilder()
    >>> builder.register(tag).register(entity)
    >>> registry = builder.build()
    >>> registry.get("tag")

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from scanmark.errors import RegistrationError
from scanmark.tokens import TokenDescriptor


class TokenRegistry:
    """Immutable, ordered registry of token descriptors.

    Thread Safety:
        Immutable after creation. Safe to share across threads.

    """

    __slots__ = ("_tokens", "_by_name")

    def __init__(
        self,
        tokens: tuple[TokenDescriptor, ...],
        by_name: dict[str, TokenDescriptor],
    ) -> None:
        """Initialize registry with pre-validated descriptors.

        Use TokenRegistryBuilder or from_tokens() to create instances.
        """
        self._tokens = tokens
        self._by_name = by_name

    @classmethod
    def from_tokens(cls, *tokens: TokenDescriptor) -> TokenRegistry:
        """Build a registry from descriptors in precedence order."""
        return TokenRegistryBuilder().register_all(tokens).build()

    def get(self, name: str) -> TokenDescriptor | None:
        """Get descriptor by token name.

        Args:
            name: Token name

        Returns:
            Descriptor if registered, None otherwise
        """
        return self._by_name.get(name)

    def index_of(self, name: str) -> int:
        """Precedence rank of a token (0 is highest).

        Raises:
            KeyError: If the token is not registered
        """
        descriptor = self._by_name[name]
        return self._tokens.index(descriptor)

    @property
    def names(self) -> tuple[str, ...]:
        """Token names in precedence order."""
        return tuple(t.name for t in self._tokens)

    @property
    def tokens(self) -> tuple[TokenDescriptor, ...]:
        """Descriptors in precedence order."""
        return self._tokens

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[TokenDescriptor]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenRegistry({list(self.names)!r})"


class TokenRegistryBuilder:
    """Mutable builder for TokenRegistry.

    Descriptors are validated as they are registered, so a broken token
    is reported at setup time rather than in the middle of a scan.

    Example:
            >>> builder = TokenRegistryBuilder()
            >>> builder.register(tag)
            >>> builder.register(entity)
            >>> registry = builder.build()

    """

    __slots__ = ("_tokens", "_by_name")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._tokens: list[TokenDescriptor] = []
        self._by_name: dict[str, TokenDescriptor] = {}

    def register(self, descriptor: TokenDescriptor) -> TokenRegistryBuilder:
        """Register a token descriptor at the lowest precedence so far.

        Args:
            descriptor: Descriptor to append

        Returns:
            Self for chaining

        Raises:
            RegistrationError: If the descriptor is incomplete, inconsistent
                or reuses a registered name
        """
        _validate(descriptor)

        if descriptor.name in self._by_name:
            raise RegistrationError(descriptor.name, "already registered")

        self._tokens.append(descriptor)
        self._by_name[descriptor.name] = descriptor
        return self

    def register_all(self, descriptors: Iterable[TokenDescriptor]) -> TokenRegistryBuilder:
        """Register multiple descriptors in order.

        Returns:
            Self for chaining
        """
        for descriptor in descriptors:
            self.register(descriptor)
        return self

    def build(self) -> TokenRegistry:
        """Build immutable registry from registered descriptors."""
        return TokenRegistry(
            tokens=tuple(self._tokens),
            by_name=dict(self._by_name),
        )

    def __len__(self) -> int:
        return len(self._tokens)


def _validate(descriptor: object) -> None:
    """Reject descriptors the engine cannot drive."""
    if not isinstance(descriptor, TokenDescriptor):
        msg = f"{descriptor!r} is not a TokenDescriptor"
        raise RegistrationError(None, msg)

    name = descriptor.name
    if not isinstance(name, str) or not name:
        raise RegistrationError(None, f"token name must be a non-empty string, got {name!r}")

    if descriptor.start is None:
        raise RegistrationError(name, "missing start probe")
    if not callable(descriptor.start):
        raise RegistrationError(name, "start probe is not callable")

    if descriptor.unit:
        if descriptor.stop is not None:
            raise RegistrationError(name, "unit tokens cannot define a stop probe")
        if descriptor.on_end is not None:
            raise RegistrationError(name, "unit tokens never receive an end callback")
        if descriptor.raw:
            raise RegistrationError(name, "unit tokens cannot be raw")
    else:
        if descriptor.stop is None:
            raise RegistrationError(name, "missing stop probe (required unless unit)")
        if not callable(descriptor.stop):
            raise RegistrationError(name, "stop probe is not callable")

    for hook_name in ("on_start", "on_end"):
        hook = getattr(descriptor, hook_name)
        if hook is not None and not callable(hook):
            raise RegistrationError(name, f"{hook_name} is not callable")
