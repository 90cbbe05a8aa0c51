import bcrypt
import pytest

from adminkit.security import (
    LETTER,
    SYMBOL,
    compare_hash_and_password,
    generate_rand_string,
    generate_random_key6,
    generate_random_key16,
    generate_random_key20,
    set_password,
)


def test_rand_string_length_and_charset():
    result = generate_rand_string(50, "ab")
    assert len(result) == 50
    assert set(result) <= {"a", "b"}


def test_rand_string_zero_length():
    assert generate_rand_string(0, LETTER) == ""


@pytest.mark.parametrize("charset", ["a", "x" * 257])
def test_rand_string_bad_charset(charset):
    with pytest.raises(ValueError):
        generate_rand_string(4, charset)


def test_rand_string_negative_length():
    with pytest.raises(ValueError):
        generate_rand_string(-1, LETTER)


def test_random_keys():
    key20 = generate_random_key20()
    key16 = generate_random_key16()
    key6 = generate_random_key6()
    assert len(key20) == 20 and set(key20) <= set(SYMBOL)
    assert len(key16) == 16 and set(key16) <= set(SYMBOL)
    assert len(key6) == 6 and set(key6) <= set(LETTER)


def test_set_password_is_deterministic():
    password = "password"
    first = set_password(password, "salt")
    assert first == set_password(password, "salt")
    assert len(first) == 64
    int(first, 16)


def test_set_password_depends_on_salt():
    password = "password"
    assert set_password(password, "salt-a") != set_password(password, "salt-b")


def test_compare_hash_and_password():
    password = "password"
    hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()
    assert compare_hash_and_password(hashed, password) is True
    assert compare_hash_and_password(hashed, "secret") is False


def test_compare_with_malformed_hash():
    with pytest.raises(ValueError):
        compare_hash_and_password("not-a-hash", "password")