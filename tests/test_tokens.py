"""Tests for the reset token codec and store."""

import hashlib
import threading
from datetime import timedelta

from beacon.models import ResetRequest
from beacon.tokens import RESET_TOKEN_TTL, ResetTokenStore, digest, issue


def _record(store, token_hash="h1", user_id="u1"):
    return ResetRequest(
        token_hash=token_hash,
        user_id=user_id,
        email="a@example.com",
        expires_at=store.expiry_from(store.now()),
    )


# ==================== Codec ====================


def test_issue_produces_64_hex_chars():
    """Test the raw secret is 32 bytes hex-encoded."""
    token = issue()
    assert len(token.raw_secret) == 64
    int(token.raw_secret, 16)


def test_storage_key_is_sha256_of_secret():
    """Test storage key is the SHA-256 hex digest."""
    token = issue()
    expected = hashlib.sha256(token.raw_secret.encode("utf-8")).hexdigest()
    assert token.storage_key == expected
    assert digest(token.raw_secret) == expected
    assert token.storage_key != token.raw_secret


def test_issue_is_unique():
    """Test two issued secrets differ."""
    assert issue().raw_secret != issue().raw_secret


# ==================== Store ====================


def test_default_ttl_is_fifteen_minutes():
    """Test the store TTL default."""
    assert RESET_TOKEN_TTL == timedelta(minutes=15)
    assert ResetTokenStore().ttl == RESET_TOKEN_TTL


def test_take_if_valid_is_single_use(store):
    """Test a record can be taken exactly once."""
    store.put(_record(store))

    assert store.take_if_valid("h1").user_id == "u1"
    assert store.take_if_valid("h1") is None
    assert len(store) == 0


def test_take_if_valid_unknown_hash(store):
    """Test unknown hashes return None."""
    assert store.take_if_valid("missing") is None


def test_take_if_valid_expired_removes_record(store, clock):
    """Test an expired record is rejected and removed."""
    store.put(_record(store))
    clock.advance(minutes=15, seconds=1)

    assert store.take_if_valid("h1") is None
    assert len(store) == 0


def test_take_if_valid_at_exact_expiry(store, clock):
    """Test a record is valid at exactly its expiry time."""
    store.put(_record(store))
    clock.advance(minutes=15)

    assert store.take_if_valid("h1") is not None


def test_take_if_valid_explicit_now(store):
    """Test the evaluation time can be passed explicitly."""
    record = _record(store)
    store.put(record)

    assert store.take_if_valid("h1", now=record.expires_at + timedelta(seconds=1)) is None


def test_sweep_removes_only_expired(store, clock):
    """Test sweep counts and removes expired records."""
    store.put(_record(store, token_hash="old"))
    clock.advance(minutes=10)
    store.put(_record(store, token_hash="new"))
    clock.advance(minutes=6)

    assert store.sweep() == 1
    assert len(store) == 1
    assert store.take_if_valid("new") is not None


def test_put_sweeps_expired(store, clock):
    """Test inserting a record clears out expired ones."""
    store.put(_record(store, token_hash="old"))
    clock.advance(minutes=20)
    store.put(_record(store, token_hash="new"))

    assert len(store) == 1


def test_overlapping_tokens_for_same_account(store):
    """Test several live tokens for one account are independent."""
    store.put(_record(store, token_hash="a"))
    store.put(_record(store, token_hash="b"))

    assert store.take_if_valid("a") is not None
    assert store.take_if_valid("b") is not None


def test_concurrent_take_single_winner(store):
    """Test only one thread receives the record."""
    store.put(_record(store))
    results = []
    barrier = threading.Barrier(16)

    def worker():
        barrier.wait()
        results.append(store.take_if_valid("h1"))

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(1 for r in results if r is not None) == 1
