"""Unit tests for gravatar URLs."""

import hashlib

from infrastructure.gravatar import gravatar_url


class TestGravatarUrl:
    def test_builds_url_from_email_digest(self) -> None:
        digest = hashlib.md5(b"ada@example.com").hexdigest()

        assert gravatar_url("ada@example.com") == (
            f"https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"
        )

    def test_case_and_whitespace_do_not_change_the_avatar(self) -> None:
        assert gravatar_url(" Ada@Example.com ") == gravatar_url("ada@example.com")
