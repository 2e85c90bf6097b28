from app.utils.security import KEY_LENGTH, hash_password, verify_password


def test_hash_format_is_hex_key_dot_salt():
    stored = hash_password("urban123")
    hashed, salt = stored.split(".")
    assert len(hashed) == KEY_LENGTH * 2
    assert len(salt) == 32
    int(hashed, 16)
    int(salt, 16)
    assert "urban123" not in stored


def test_same_password_gets_different_salts():
    assert hash_password("urban123") != hash_password("urban123")


def test_verify_accepts_correct_password():
    stored = hash_password("urban123")
    assert verify_password("urban123", stored)


def test_verify_rejects_wrong_password():
    stored = hash_password("urban123")
    assert not verify_password("urban124", stored)


def test_verify_rejects_malformed_values():
    assert not verify_password("x", "")
    assert not verify_password("x", "no-dot-here")
    assert not verify_password("x", "zz.abcd")
    assert not verify_password("x", "abcd.abcd")
