"""Tests for signup, login, logout and refresh-token rotation."""

from support import DEFAULT_PASSWORD, DatabaseTestCase

from app.core.errors import AuthError, ValidationError
from app.core.security import decode_access_token, verify_password
from app.models import User
from app.services import auth as auth_service


class TestSignup(DatabaseTestCase):
    def test_stores_hashed_password_and_defaults(self) -> None:
        user = auth_service.signup(self.db, "alice", "alice@example.com", "pw-alice")
        self.assertNotEqual(user.password_hash, "pw-alice")
        self.assertTrue(verify_password("pw-alice", user.password_hash))
        self.assertEqual(user.role, "user")
        self.assertEqual(user.followers, [])
        self.assertEqual(user.followings, [])
        self.assertTrue(user.profile_picture.startswith("http"))
        self.assertIsNone(user.refresh_token)

    def test_duplicate_username_is_rejected_without_mutation(self) -> None:
        self.make_user("alice")
        with self.assertRaises(ValidationError) as ctx:
            auth_service.signup(self.db, "alice", "other@example.com", "pw")
        self.assertEqual(ctx.exception.message, "username already exists")
        self.assertEqual(self.db.query(User).count(), 1)

    def test_duplicate_email_is_rejected(self) -> None:
        self.make_user("alice", email="shared@example.com")
        with self.assertRaises(ValidationError) as ctx:
            auth_service.signup(self.db, "bob", "shared@example.com", "pw")
        self.assertEqual(ctx.exception.message, "email already exists")
        self.assertEqual(self.db.query(User).count(), 1)


class TestLogin(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")

    def test_unknown_user(self) -> None:
        with self.assertRaises(AuthError) as ctx:
            auth_service.login(self.db, "nobody", DEFAULT_PASSWORD)
        self.assertEqual(ctx.exception.message, auth_service.USER_NOT_FOUND_MESSAGE)

    def test_wrong_password(self) -> None:
        with self.assertRaises(AuthError) as ctx:
            auth_service.login(self.db, "alice", "wrong")
        self.assertEqual(ctx.exception.message, auth_service.BAD_PASSWORD_MESSAGE)
        self.db.refresh(self.alice)
        self.assertIsNone(self.alice.refresh_token)

    def test_success_stores_refresh_token_and_signs_access_token(self) -> None:
        user, pair = auth_service.login(self.db, "alice", DEFAULT_PASSWORD)
        self.assertEqual(user.refresh_token, pair.refresh_token)
        identity = decode_access_token(pair.access_token)
        self.assertEqual(identity.id, self.alice.id)
        self.assertEqual(identity.username, "alice")

    def test_second_login_revokes_first_refresh_token(self) -> None:
        _, first = auth_service.login(self.db, "alice", DEFAULT_PASSWORD)
        _, second = auth_service.login(self.db, "alice", DEFAULT_PASSWORD)
        self.assertNotEqual(first.refresh_token, second.refresh_token)
        with self.assertRaises(AuthError) as ctx:
            auth_service.refresh(self.db, first.refresh_token)
        self.assertEqual(ctx.exception.message, auth_service.INVALID_REFRESH_MESSAGE)
        # The current token still works.
        auth_service.refresh(self.db, second.refresh_token)


class TestLogout(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_user("alice")

    def test_missing_token(self) -> None:
        for token in (None, ""):
            with self.assertRaises(ValidationError) as ctx:
                auth_service.logout(self.db, token)
            self.assertEqual(ctx.exception.message, "logout error")

    def test_unsets_stored_token(self) -> None:
        user, pair = auth_service.login(self.db, "alice", DEFAULT_PASSWORD)
        self.assertEqual(auth_service.logout(self.db, pair.refresh_token), 1)
        self.db.expire_all()
        self.assertIsNone(self.db.get(User, user.id).refresh_token)
        with self.assertRaises(AuthError):
            auth_service.refresh(self.db, pair.refresh_token)

    def test_unknown_token_is_accepted(self) -> None:
        self.assertEqual(auth_service.logout(self.db, "not-a-live-token"), 0)


class TestRefresh(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_user("alice")
        _, self.pair = auth_service.login(self.db, "alice", DEFAULT_PASSWORD)

    def test_missing_token(self) -> None:
        with self.assertRaises(AuthError) as ctx:
            auth_service.refresh(self.db, None)
        self.assertEqual(ctx.exception.message, "You are not authenticated!")

    def test_rotation_makes_old_token_single_use(self) -> None:
        rotated = auth_service.refresh(self.db, self.pair.refresh_token)
        self.assertNotEqual(rotated.refresh_token, self.pair.refresh_token)
        self.assertEqual(decode_access_token(rotated.access_token).username, "alice")

        with self.assertRaises(AuthError) as ctx:
            auth_service.refresh(self.db, self.pair.refresh_token)
        self.assertEqual(ctx.exception.message, auth_service.INVALID_REFRESH_MESSAGE)

        self.db.expire_all()
        stored = self.db.query(User).filter(User.username == "alice").one()
        self.assertEqual(stored.refresh_token, rotated.refresh_token)

    def test_stored_token_with_bad_signature_is_rejected(self) -> None:
        user = self.db.query(User).filter(User.username == "alice").one()
        user.refresh_token = "forged.token.value"
        self.db.commit()
        with self.assertRaises(AuthError) as ctx:
            auth_service.refresh(self.db, "forged.token.value")
        self.assertEqual(ctx.exception.message, auth_service.INVALID_REFRESH_MESSAGE)
