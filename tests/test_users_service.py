"""Tests for profile lookup, update, deletion and search."""

from support import DatabaseTestCase

from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.core.security import verify_password
from app.models import Article, Comment, Follow, User
from app.services import articles as article_service
from app.services import comments as comment_service
from app.services import social_graph
from app.services import users as user_service


class TestLookup(DatabaseTestCase):
    def test_by_id_and_username(self) -> None:
        alice = self.make_user("alice")
        self.assertEqual(user_service.get_user(self.db, alice.id).username, "alice")
        self.assertEqual(user_service.get_user_by_username(self.db, "alice").id, alice.id)

    def test_unknown(self) -> None:
        with self.assertRaises(NotFoundError):
            user_service.get_user(self.db, 42)
        with self.assertRaises(NotFoundError):
            user_service.get_user_by_username(self.db, "ghost")


class TestUpdate(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")

    def test_owner_updates_profile_fields(self) -> None:
        user = user_service.update_user(
            self.db,
            self.alice.id,
            self.identity(self.alice),
            {"description": "hi there", "gender": "f", "password": "new-pass"},
        )
        self.assertEqual(user.description, "hi there")
        self.assertEqual(user.gender, "f")
        self.assertTrue(verify_password("new-pass", user.password_hash))

    def test_privileged_fields_are_ignored(self) -> None:
        user = user_service.update_user(
            self.db,
            self.alice.id,
            self.identity(self.alice),
            {"role": "admin", "refresh_token": "x", "description": "d"},
        )
        self.assertEqual(user.role, "user")
        self.assertIsNone(user.refresh_token)

    def test_other_user_cannot_update(self) -> None:
        with self.assertRaises(AuthorizationError):
            user_service.update_user(
                self.db, self.alice.id, self.identity(self.bob), {"description": "pwned"}
            )
        self.db.expire_all()
        self.assertEqual(self.db.get(User, self.alice.id).description, "")

    def test_admin_can_update_any_account(self) -> None:
        admin = self.make_user("root", role="admin")
        user = user_service.update_user(
            self.db, self.alice.id, self.identity(admin), {"description": "moderated"}
        )
        self.assertEqual(user.description, "moderated")

    def test_taken_username_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            user_service.update_user(
                self.db, self.alice.id, self.identity(self.alice), {"username": "bob"}
            )


class TestDelete(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")

    def test_other_user_cannot_delete(self) -> None:
        with self.assertRaises(AuthorizationError):
            user_service.delete_user(self.db, self.alice.id, self.identity(self.bob))
        self.assertIsNotNone(self.db.get(User, self.alice.id))

    def test_delete_removes_owned_rows_and_edges(self) -> None:
        as_alice = self.identity(self.alice)
        as_bob = self.identity(self.bob)
        social_graph.follow(self.db, as_alice, "bob")
        social_graph.follow(self.db, as_bob, "alice")
        own = article_service.create_article(self.db, as_alice, "alice post")
        bobs = article_service.create_article(self.db, as_bob, "bob post")
        article_service.toggle_like(self.db, bobs.id, as_alice)
        comment_service.add_comment(self.db, bobs.id, as_alice, "from alice")
        comment_service.add_comment(self.db, own.id, as_bob, "from bob")

        user_service.delete_user(self.db, self.alice.id, as_alice)

        self.db.expire_all()
        self.assertIsNone(self.db.get(User, as_alice.id))
        self.assertEqual(self.db.query(Follow).count(), 0)
        self.assertEqual(self.db.query(Article).count(), 1)
        self.assertEqual(self.db.query(Comment).count(), 0)
        bob = self.db.get(User, as_bob.id)
        self.assertEqual(bob.followers, [])
        self.assertEqual(bob.followings, [])
        self.assertEqual(self.db.get(Article, bobs.id).likes, [])


class TestSearch(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        for name in ("Alice", "alicia", "bob", "malice"):
            self.make_user(name)

    def test_case_insensitive_substring(self) -> None:
        users, total = user_service.search_users(self.db, "ALI", 10)
        self.assertEqual([u.username for u in users], ["Alice", "alicia", "malice"])
        self.assertEqual(total, 3)

    def test_limit_caps_results_but_not_total(self) -> None:
        users, total = user_service.search_users(self.db, "ali", 2)
        self.assertEqual(len(users), 2)
        self.assertEqual(total, 3)

    def test_empty_search_matches_everyone(self) -> None:
        _, total = user_service.search_users(self.db, "", 5)
        self.assertEqual(total, 4)

    def test_like_wildcards_are_literal(self) -> None:
        _, total = user_service.search_users(self.db, "%", 5)
        self.assertEqual(total, 0)
