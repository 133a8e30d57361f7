import pytest
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

from jsonapi_document import Document, HasMany, HasOne, ModelSerializer, Resource, Serializer
from jsonapi_document.serializers import SerializerRegistry, registry

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    posts = relationship("Post", back_populates="user")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"))
    user = relationship("User", back_populates="posts")


@registry.register
class UserSerializer(ModelSerializer):
    class Meta:
        model = User
        fields = ["name"]


@registry.register
class PostSerializer(ModelSerializer):
    class Meta:
        model = Post


@pytest.fixture
def user_with_posts():
    user = User(id=1, name="Alice", email="alice@example.com")
    Post(id=3, title="Hello", user=user)
    Post(id=4, title="Again", user=user)
    return user


def test_model_serializer_type_defaults_to_table_name():
    assert UserSerializer.resource_type() == "users"
    assert PostSerializer().get_type(None) == "posts"
    assert "users" in registry


def test_model_serializer_id_and_attributes(user_with_posts):
    post = user_with_posts.posts[0]

    assert PostSerializer().get_id(post) == "3"
    assert PostSerializer().get_attributes(post) == {"title": "Hello"}
    assert UserSerializer().get_attributes(user_with_posts) == {"name": "Alice"}
    assert UserSerializer().get_attributes(user_with_posts, {"email"}) == {}


def test_model_serializer_id_is_empty_before_flush():
    assert UserSerializer().get_id(User(name="Nobody", email="-")) == ""


def test_model_serializer_derives_relationship_builders():
    user_builders = UserSerializer().get_relationship_builders()
    post_builders = PostSerializer().get_relationship_builders()

    assert isinstance(user_builders["posts"], HasMany)
    assert isinstance(post_builders["user"], HasOne)


def test_model_serializer_document(user_with_posts):
    post = user_with_posts.posts[0]
    document = Document(Resource(post, PostSerializer()).with_includes(["user.posts"])).to_dict()

    assert document["data"]["relationships"] == {"user": {"data": {"type": "users", "id": "1"}}}
    assert [(item["type"], item["id"]) for item in document["included"]] == [
        ("users", "1"),
        ("posts", "4"),
    ]
    assert document["included"][0]["relationships"]["posts"]["data"] == [
        {"type": "posts", "id": "3"},
        {"type": "posts", "id": "4"},
    ]


def test_registry_resolves_and_caches_instances():
    local = SerializerRegistry()
    local.register(UserSerializer)

    assert isinstance(local.get("users"), UserSerializer)
    assert local.get("users") is local.get("users")
    with pytest.raises(LookupError):
        local.get("posts")


def test_registry_requires_a_type():
    class Untyped(Serializer):
        class Meta:
            fields = ["name"]

    with pytest.raises(ValueError):
        SerializerRegistry().register(Untyped)


def test_builder_accepts_serializer_instance_class_or_type():
    instance = UserSerializer()

    assert HasOne(lambda post: post.user, instance).get_serializer() is instance
    assert isinstance(HasOne(lambda post: post.user, UserSerializer).get_serializer(), UserSerializer)
    assert isinstance(HasOne(lambda post: post.user, "users").get_serializer(), UserSerializer)


def test_builder_relationship_links_and_meta(user_with_posts):
    builder = HasMany(
        lambda user: user.posts,
        "posts",
        links=lambda user: {"related": f"/users/{user.id}/posts"},
        meta=lambda user: {"count": len(user.posts)},
    )
    relationship = builder.build(user_with_posts)

    assert relationship.to_dict() == {
        "data": [{"type": "posts", "id": "3"}, {"type": "posts", "id": "4"}],
        "links": {"related": "/users/1/posts"},
        "meta": {"count": 2},
    }
    assert not relationship.is_empty
    assert HasOne(lambda user: None, "users").build(user_with_posts).is_empty
