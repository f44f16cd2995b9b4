import jwt
import pytest

from carrental.utils.security import bearer_token, check_hash, decode_token, generate_hash, issue_token

SECRET = "unit-secret"
CUSTOMER = {"id": 7, "username": "anna"}


def test_password_hash_roundtrip():
    pw = "Secret123"
    h = generate_hash(pw)
    assert check_hash(pw, h)
    assert not check_hash("wrong", h)


def test_check_hash_with_garbage_hash():
    assert not check_hash("pw", "not-a-hash")


def test_token_carries_user_and_role():
    payload = decode_token(issue_token(CUSTOMER, "ADMIN", SECRET), SECRET)
    assert payload["userId"] == 7
    assert payload["username"] == "anna"
    assert payload["role"] == "ADMIN"
    assert payload["exp"] - payload["iat"] == 24 * 3600


def test_expired_token_rejected():
    token = issue_token(CUSTOMER, "CUSTOMER", SECRET, expires_hours=-1)
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(token, SECRET)


def test_wrong_secret_rejected():
    with pytest.raises(jwt.InvalidSignatureError):
        decode_token(issue_token(CUSTOMER, "CUSTOMER", SECRET), "other-secret")


def test_token_without_user_id_rejected():
    token = jwt.encode({"username": "anna"}, SECRET, algorithm="HS256")
    with pytest.raises(jwt.InvalidTokenError):
        decode_token(token, SECRET)


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def", "abc.def"),
    ("bearer   abc ", "abc"),
    ("Basic abc", None),
    ("Bearer", None),
    ("", None),
    (None, None),
])
def test_bearer_token_parsing(header, expected):
    assert bearer_token(header) == expected
