from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from operator import attrgetter
from typing import Any, Optional

import pytest

from jsonapi_document import HasMany, HasOne, Serializer, SerializerRegistry

blog_registry = SerializerRegistry()


@dataclass(eq=False)
class Person:
    id: int
    name: str
    articles: list[Any] = field(default_factory=list)
    best_friend: Optional["Person"] = None


@dataclass(eq=False)
class Comment:
    id: int
    body: str
    author: Optional[Person] = None


@dataclass(eq=False)
class Article:
    id: int
    title: str
    body: str = ""
    published: Optional[datetime] = None
    author: Optional[Person] = None
    comments: list[Comment] = field(default_factory=list)


@blog_registry.register
class PersonSerializer(Serializer):
    class Meta:
        type_ = "people"
        fields = ["name"]
        relationships = {
            "articles": HasMany(attrgetter("articles"), "articles", registry=blog_registry),
            "best_friend": HasOne(attrgetter("best_friend"), "people", registry=blog_registry),
        }


@blog_registry.register
class CommentSerializer(Serializer):
    class Meta:
        type_ = "comments"
        relationships = {
            "author": HasOne(attrgetter("author"), "people", registry=blog_registry),
        }


@blog_registry.register
class ArticleSerializer(Serializer):
    class Meta:
        type_ = "articles"
        fields = ["title", "body", "published"]
        relationships = {
            "author": HasOne(
                attrgetter("author"),
                "people",
                registry=blog_registry,
                links=lambda article: {"related": f"/articles/{article.id}/author"},
            ),
            "comments": HasMany(attrgetter("comments"), "comments", registry=blog_registry),
        }

    def get_links(self, model: Any) -> dict[str, Any]:
        return {"self": f"/articles/{model.id}"}


@dataclass
class Blog:
    alice: Person
    bob: Person
    first: Article
    second: Article
    comments: list[Comment]


@pytest.fixture
def blog() -> Blog:
    alice = Person(id=1, name="Alice")
    bob = Person(id=2, name="Bob")
    alice.best_friend = bob
    bob.best_friend = alice

    comments = [
        Comment(id=10, body="Nice", author=bob),
        Comment(id=11, body="Thanks", author=alice),
    ]
    first = Article(
        id=1,
        title="Hello",
        body="First post",
        published=datetime(2024, 5, 1, 12, 30),
        author=alice,
        comments=comments,
    )
    second = Article(id=2, title="Again", body="Second post", author=bob)
    alice.articles = [first]
    bob.articles = [second]
    return Blog(alice=alice, bob=bob, first=first, second=second, comments=comments)


@pytest.fixture
def article_serializer() -> ArticleSerializer:
    return ArticleSerializer()


@pytest.fixture
def person_serializer() -> PersonSerializer:
    return PersonSerializer()
