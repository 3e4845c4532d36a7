"""Tests for adding and listing comments."""

from support import DatabaseTestCase

from app.core.errors import NotFoundError, ValidationError
from app.models import Article, Comment
from app.models.article import COMMENT_MAX_LENGTH
from app.services import comments as comment_service


class TestAddComment(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")
        self.article = Article(owner=self.alice, description="post")
        self.db.add(self.article)
        self.db.commit()

    def test_comment_is_appended_to_article(self) -> None:
        comment = comment_service.add_comment(
            self.db, self.article.id, self.identity(self.bob), "nice"
        )
        self.assertEqual(comment.author_id, self.bob.id)
        self.assertEqual(comment.body, "nice")
        self.db.expire_all()
        self.assertEqual(self.db.get(Article, self.article.id).comments, [comment.id])

    def test_max_length_is_accepted(self) -> None:
        body = "x" * COMMENT_MAX_LENGTH
        comment = comment_service.add_comment(
            self.db, self.article.id, self.identity(self.bob), body
        )
        self.assertEqual(len(comment.body), COMMENT_MAX_LENGTH)

    def test_too_long_is_rejected_without_mutation(self) -> None:
        with self.assertRaises(ValidationError):
            comment_service.add_comment(
                self.db,
                self.article.id,
                self.identity(self.bob),
                "x" * (COMMENT_MAX_LENGTH + 1),
            )
        self.assertEqual(self.db.query(Comment).count(), 0)

    def test_unknown_article(self) -> None:
        with self.assertRaises(NotFoundError):
            comment_service.add_comment(self.db, 999, self.identity(self.bob), "hello?")
        self.assertEqual(self.db.query(Comment).count(), 0)

    def test_list_in_insertion_order(self) -> None:
        first = comment_service.add_comment(
            self.db, self.article.id, self.identity(self.bob), "first"
        )
        second = comment_service.add_comment(
            self.db, self.article.id, self.identity(self.alice), "second"
        )
        listed = comment_service.list_comments(self.db, self.article.id)
        self.assertEqual([c.id for c in listed], [first.id, second.id])
        self.assertEqual([c.body for c in listed], ["first", "second"])
