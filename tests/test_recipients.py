"""Recipient resolver tests."""

from shared_lunch.services.recipients import RecipientResolver


def test_numeric_identifier_is_its_own_address() -> None:
    resolver = RecipientResolver()

    assert resolver.resolve("123456789") == 123456789
    assert len(resolver) == 0


def test_unknown_username_is_not_found() -> None:
    assert RecipientResolver().resolve("@alice") is None


def test_register_is_idempotent_and_last_write_wins() -> None:
    resolver = RecipientResolver()

    resolver.register("@alice", 10)
    resolver.register("@alice", 10)
    assert resolver.resolve("@alice") == 10
    assert len(resolver) == 1

    resolver.register("@alice", 11)
    assert resolver.resolve("@alice") == 11


def test_mixed_identifiers_are_looked_up() -> None:
    resolver = RecipientResolver()
    resolver.register("12ab", 5)

    assert resolver.resolve("12ab") == 5
    assert resolver.resolve("12\n") is None
