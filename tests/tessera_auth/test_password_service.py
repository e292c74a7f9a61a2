"""Tests for PasswordHashingService."""

import pytest

from tessera_auth.services import PasswordHashingService, work_factor_for
from tests.shared.fixtures import TEST_ITERATIONS, TEST_PASSWORD


@pytest.mark.parametrize(
    ("iterations", "expected"),
    [
        (1, 10),
        (4095, 10),
        (4096, 11),
        (8191, 11),
        (8192, 12),
        (16384, 13),
        (32768, 14),
        (65536, 15),
        (100_000, 15),
        (131072, 16),
        (10_000_000, 16),
    ],
)
def test_work_factor_for(iterations, expected):
    assert work_factor_for(iterations) == expected


class TestPasswordHashingService:
    """Tests for hashing and verification."""

    def setup_method(self):
        self.service = PasswordHashingService(iterations=TEST_ITERATIONS)

    def test_hash_then_verify(self):
        password_hash = self.service.hash(TEST_PASSWORD)

        assert password_hash != TEST_PASSWORD
        assert self.service.verify(password_hash, TEST_PASSWORD)

    def test_wrong_password_does_not_verify(self):
        password_hash = self.service.hash(TEST_PASSWORD)

        assert not self.service.verify(password_hash, "Wrong_passw0rd!")

    def test_hashes_are_salted(self):
        assert self.service.hash(TEST_PASSWORD) != self.service.hash(TEST_PASSWORD)

    @pytest.mark.parametrize("malformed", ["", "not-a-hash", "$2b$xx$garbage"])
    def test_malformed_hash_verifies_false(self, malformed):
        assert self.service.verify(malformed, TEST_PASSWORD) is False

    def test_empty_password_cannot_be_hashed(self):
        with pytest.raises(ValueError):
            self.service.hash("")

    def test_long_passwords_hash(self):
        long_password = "A1!" + "x" * 200

        password_hash = self.service.hash(long_password)

        assert self.service.verify(password_hash, long_password)

    def test_cost_factor_is_embedded(self):
        password_hash = self.service.hash(TEST_PASSWORD)

        assert password_hash.split("$")[2] == "10"
        assert not self.service.needs_rehash(password_hash)

    def test_needs_rehash_for_other_cost(self):
        stronger = PasswordHashingService(iterations=5000)

        assert stronger.rounds == 11
        assert stronger.needs_rehash(self.service.hash(TEST_PASSWORD))

    def test_needs_rehash_for_garbage(self):
        assert self.service.needs_rehash("garbage")

    def test_iterations_must_be_positive(self):
        with pytest.raises(ValueError):
            PasswordHashingService(iterations=0)
