"""In-memory stand-in for the NovelAI Hub REST API.

Served to the client through ``httpx.ASGITransport``; every response uses
the ``{"success", "data", "message"}`` envelope of the real API.
"""

import itertools
import math
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse

BASE_URL = "http://testserver/api"

LONG_CONTENT = " ".join(["word"] * 150)


class FakeAPIError(Exception):
    """Error answered as ``{"success": false, "message": ...}``."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class FakeBackend:
    """Users, sessions and stories held in dictionaries."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.tokens: dict[str, str] = {}
        self.stories: dict[str, dict[str, Any]] = {}
        self.reset_tokens: dict[str, str] = {}
        self.requests: list[tuple[str, str]] = []
        self.generated_content = LONG_CONTENT
        self._ids = itertools.count(1)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def add_user(
        self,
        username: str = "ada",
        email: str = "ada@example.com",
        password: str = "secret1",
    ) -> tuple[dict[str, Any], str]:
        """Create a user and an active token for it."""
        user = {
            "_id": self.next_id("u"),
            "username": username,
            "email": email,
            "password": password,
            "profilePicture": None,
        }
        self.users[user["_id"]] = user
        return user, self.issue_token(user["_id"])

    def issue_token(self, user_id: str) -> str:
        token = self.next_id("tok-")
        self.tokens[token] = user_id
        return token

    def add_story(
        self,
        author_id: str,
        title: str = "The Lighthouse",
        genre: str = "fantasy",
        content: str = LONG_CONTENT,
        likes: list[str] | None = None,
        is_ai_generated: bool = False,
    ) -> dict[str, Any]:
        story = {
            "_id": self.next_id("s"),
            "title": title,
            "genre": genre,
            "content": content,
            "author": author_id,
            "likes": list(likes or []),
            "comments": [],
            "isAIGenerated": is_ai_generated,
            "image": None,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        self.stories[story["_id"]] = story
        return story

    def user_json(self, user: dict[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in user.items() if key != "password"}

    def story_json(self, story: dict[str, Any]) -> dict[str, Any]:
        author = self.users.get(story["author"], {"_id": story["author"], "username": ""})
        return {
            **story,
            "author": {"_id": author["_id"], "username": author["username"]},
        }

    def user_for(self, authorization: str | None) -> dict[str, Any]:
        if not authorization or not authorization.startswith("Bearer "):
            raise FakeAPIError("Not authorized, no token", 401)
        user_id = self.tokens.get(authorization.removeprefix("Bearer "))
        if user_id is None or user_id not in self.users:
            raise FakeAPIError("Not authorized, token failed", 401)
        return self.users[user_id]

    def story_for(self, story_id: str) -> dict[str, Any]:
        story = self.stories.get(story_id)
        if story is None:
            raise FakeAPIError("Story not found", 404)
        return story


async def _body(request: Request) -> dict[str, Any]:
    """JSON body, or multipart form fields with uploads by field name."""
    if request.headers.get("content-type", "").startswith("multipart/form-data"):
        form = await request.form()
        return {key: value for key, value in form.items()}
    if not await request.body():
        return {}
    return await request.json()


def _ok(data: Any = None, message: str | None = None, status_code: int = 200) -> JSONResponse:
    content: dict[str, Any] = {"success": True}
    if data is not None:
        content["data"] = data
    if message is not None:
        content["message"] = message
    return JSONResponse(content, status_code=status_code)


def create_fake_api(backend: FakeBackend) -> FastAPI:
    app = FastAPI()

    @app.middleware("http")
    async def record_requests(request: Request, call_next):
        backend.requests.append((request.method, request.url.path))
        return await call_next(request)

    @app.exception_handler(FakeAPIError)
    async def fake_api_error_handler(request: Request, exc: FakeAPIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    # =========================================================================
    # Users
    # =========================================================================

    @app.post("/api/users/register")
    async def register(request: Request) -> JSONResponse:
        body = await _body(request)
        if any(u["email"] == body.get("email") for u in backend.users.values()):
            raise FakeAPIError("User already exists")
        user, token = backend.add_user(body["username"], body["email"], body["password"])
        return _ok({**backend.user_json(user), "token": token}, status_code=201)

    @app.post("/api/users/login")
    async def login(request: Request) -> JSONResponse:
        body = await _body(request)
        for user in backend.users.values():
            if user["email"] == body.get("email") and user["password"] == body.get("password"):
                token = backend.issue_token(user["_id"])
                return _ok({**backend.user_json(user), "token": token})
        raise FakeAPIError("Invalid email or password", 401)

    @app.get("/api/users/profile")
    async def get_profile(authorization: str | None = Header(default=None)) -> JSONResponse:
        return _ok(backend.user_json(backend.user_for(authorization)))

    @app.put("/api/users/profile")
    async def update_profile(
        request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        body = await _body(request)
        if "newPassword" in body:
            if body.get("currentPassword") != user["password"]:
                raise FakeAPIError("Current password is incorrect")
            user["password"] = body["newPassword"]
        for key in ("username", "email"):
            if key in body:
                user[key] = body[key]
        return _ok(backend.user_json(user))

    @app.post("/api/users/profile/picture")
    async def upload_picture(
        request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        body = await _body(request)
        image = body.get("image")
        if image is None:
            raise FakeAPIError("Please upload an image")
        user["profilePicture"] = f"/uploads/{image.filename}"
        return _ok({"profilePicture": user["profilePicture"]})

    @app.post("/api/users/forgot-password")
    async def forgot_password(request: Request) -> JSONResponse:
        body = await _body(request)
        for user in backend.users.values():
            if user["email"] == body.get("email"):
                backend.reset_tokens[backend.next_id("reset-")] = user["_id"]
                return _ok(message="Password reset email sent")
        raise FakeAPIError("User not found", 404)

    @app.post("/api/users/reset-password")
    async def reset_password(request: Request) -> JSONResponse:
        body = await _body(request)
        user_id = backend.reset_tokens.pop(body.get("token", ""), None)
        if user_id is None:
            raise FakeAPIError("Invalid or expired reset token")
        backend.users[user_id]["password"] = body["newPassword"]
        return _ok(message="Password reset successful")

    # =========================================================================
    # Stories
    # =========================================================================

    @app.get("/api/stories")
    async def list_stories(
        page: int = 1,
        limit: int = 10,
        genre: str | None = None,
        search: str | None = None,
    ) -> JSONResponse:
        stories = list(backend.stories.values())
        if genre:
            stories = [s for s in stories if s["genre"] == genre]
        if search:
            stories = [s for s in stories if search.lower() in s["title"].lower()]
        total = len(stories)
        window = stories[(page - 1) * limit : page * limit]
        return _ok(
            {
                "stories": [backend.story_json(s) for s in window],
                "page": page,
                "pages": max(1, math.ceil(total / limit)),
                "total": total,
            }
        )

    @app.post("/api/stories/generate")
    async def generate_story(
        request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        backend.user_for(authorization)
        body = await _body(request)
        if not body.get("prompt"):
            raise FakeAPIError("Prompt is required")
        return _ok({"content": backend.generated_content})

    @app.post("/api/stories")
    async def create_story(
        request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        body = await _body(request)
        image = body.pop("image", None)
        ai = body.get("isAIGenerated")
        story = backend.add_story(
            user["_id"],
            title=body["title"],
            genre=body["genre"],
            content=body["content"],
            is_ai_generated=ai in (True, "true"),
        )
        if image is not None:
            story["image"] = f"/uploads/{image.filename}"
        return _ok(backend.story_json(story), status_code=201)

    @app.get("/api/stories/user/{user_id}")
    async def user_stories(
        user_id: str, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        backend.user_for(authorization)
        stories = [s for s in backend.stories.values() if s["author"] == user_id]
        return _ok([backend.story_json(s) for s in stories])

    @app.get("/api/stories/{story_id}")
    async def get_story(story_id: str) -> JSONResponse:
        return _ok(backend.story_json(backend.story_for(story_id)))

    @app.put("/api/stories/{story_id}")
    async def update_story(
        story_id: str, request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        story = backend.story_for(story_id)
        if story["author"] != user["_id"]:
            raise FakeAPIError("Not authorized to update this story", 403)
        body = await _body(request)
        for key in ("title", "genre", "content"):
            if key in body:
                story[key] = body[key]
        return _ok(backend.story_json(story))

    @app.delete("/api/stories/{story_id}")
    async def delete_story(
        story_id: str, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        story = backend.story_for(story_id)
        if story["author"] != user["_id"]:
            raise FakeAPIError("Not authorized to delete this story", 403)
        del backend.stories[story_id]
        return _ok(message="Story removed")

    @app.post("/api/stories/{story_id}/like")
    async def toggle_like(
        story_id: str, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        story = backend.story_for(story_id)
        if user["_id"] in story["likes"]:
            story["likes"].remove(user["_id"])
            liked = False
        else:
            story["likes"].append(user["_id"])
            liked = True
        return _ok({"isLiked": liked, "likes": len(story["likes"])})

    @app.post("/api/stories/{story_id}/comments")
    async def add_comment(
        story_id: str, request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        user = backend.user_for(authorization)
        story = backend.story_for(story_id)
        body = await _body(request)
        comment = {
            "_id": backend.next_id("c"),
            "content": body["content"],
            "author": {"_id": user["_id"], "username": user["username"]},
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        story["comments"].append(comment)
        return _ok(comment, status_code=201)

    return app
