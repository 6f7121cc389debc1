# Dribbble Client — authenticated calls against the Dribbble REST API v1.
# Created: 2026-10-19
#
# Endpoint reference: http://developer.dribbble.com/v1/

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from dribbble_oauth.config import Settings
from dribbble_oauth.errors import NotAuthenticatedError
from dribbble_oauth.http import open_client
from dribbble_oauth.oauth import OAuthManager
from dribbble_oauth.request_builder import BodyKind, FormValue, RequestSpec, build_request
from dribbble_oauth.responses import ApiResult, classify_response

logger = logging.getLogger(__name__)


class DribbbleClient:
    """HTTP client for the Dribbble API.

    Uses the bearer token held by an authenticated OAuthManager. The token
    is checked at construction; if it is cleared later, ``send`` reports
    NotAuthenticatedError in the result. It is never refreshed.
    """

    def __init__(
        self,
        auth: OAuthManager,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not auth.is_authenticated():
            raise NotAuthenticatedError(
                "Dribbble not authenticated. Complete the OAuth flow before creating a client."
            )
        self.auth = auth
        self.settings = settings or auth.settings
        self._http_client = http_client

    @classmethod
    def create(cls, auth: OAuthManager, **kwargs: Any) -> DribbbleClient | None:
        """Like the constructor, but returns None when not authenticated."""
        if not auth.is_authenticated():
            return None
        return cls(auth, **kwargs)

    async def send(
        self,
        path: str,
        method: str = "GET",
        body_kind: BodyKind = BodyKind.NONE,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> ApiResult:
        """Send one API request and classify the response.

        Args:
            path: Resource path relative to the API base, e.g. "shots/42".
            method: HTTP method.
            body_kind: How ``params``/``body`` are encoded.
            params: Query parameters for NONE/QUERY; the body mapping for
                FORM_JSON/MULTIPART when ``body`` is not given.
            body: Raw bytes for QUERY, or the form/JSON mapping.

        Returns:
            ApiResult. Failures are reported in ``ApiResult.error``.
        """
        kind = BodyKind(body_kind)
        if kind in (BodyKind.FORM_JSON, BodyKind.MULTIPART):
            payload = body if body is not None else dict(params or {})
            spec = RequestSpec(path, method, kind, {}, payload)
        else:
            spec = RequestSpec(path, method, kind, dict(params or {}), body)

        token = self.auth.token
        if not token:
            logger.warning("Dribbble API %s %s skipped: token was cleared", method, path)
            return ApiResult(
                error=NotAuthenticatedError("Dribbble token was cleared; authenticate again")
            )

        request = build_request(
            spec,
            self.settings.api_base_url,
            token,
            form_json_content_type=self.settings.form_json_content_type,
        )
        logger.debug("Dribbble API %s %s", method, path)

        try:
            async with open_client(self._http_client, self.settings.request_timeout) as client:
                resp = await client.send(request)
        except httpx.HTTPError as e:
            logger.warning("Dribbble API %s %s failed: %s", method, path, e)
            return classify_response(getattr(e, "response", None), e)

        return classify_response(resp)

    async def _get(self, path: str, params: Mapping[str, Any] | None = None) -> ApiResult:
        return await self.send(path, "GET", BodyKind.QUERY if params else BodyKind.NONE, params)

    async def _json(self, path: str, method: str, parameters: Mapping[str, Any]) -> ApiResult:
        return await self.send(path, method, BodyKind.FORM_JSON, body=dict(parameters))

    async def _form(
        self, path: str, method: str, parameters: Mapping[str, FormValue]
    ) -> ApiResult:
        return await self.send(path, method, BodyKind.MULTIPART, body=dict(parameters))

    # -- Buckets ------------------------------------------------------------

    async def get_bucket(self, bucket_id: str) -> ApiResult:
        return await self._get(f"buckets/{bucket_id}")

    async def create_bucket(self, parameters: Mapping[str, Any]) -> ApiResult:
        return await self._json("buckets", "POST", parameters)

    async def update_bucket(self, bucket_id: str, parameters: Mapping[str, Any]) -> ApiResult:
        return await self._json(f"buckets/{bucket_id}", "PUT", parameters)

    async def delete_bucket(self, bucket_id: str) -> ApiResult:
        return await self.send(f"buckets/{bucket_id}", "DELETE")

    async def list_bucket_shots(self, bucket_id: str) -> ApiResult:
        return await self._get(f"buckets/{bucket_id}/shots")

    async def add_shot_to_bucket(self, bucket_id: str, parameters: Mapping[str, Any]) -> ApiResult:
        return await self._json(f"buckets/{bucket_id}/shots", "PUT", parameters)

    async def remove_shot_from_bucket(
        self, bucket_id: str, parameters: Mapping[str, Any]
    ) -> ApiResult:
        return await self._json(f"buckets/{bucket_id}/shots", "DELETE", parameters)

    # -- Projects -----------------------------------------------------------

    async def get_project(self, project_id: str) -> ApiResult:
        return await self._get(f"projects/{project_id}")

    async def list_project_shots(self, project_id: str) -> ApiResult:
        return await self._get(f"projects/{project_id}/shots")

    # -- Shots --------------------------------------------------------------

    async def list_shots(self, parameters: Mapping[str, Any] | None = None) -> ApiResult:
        return await self._get("shots", parameters)

    async def get_shot(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}")

    async def create_shot(self, parameters: Mapping[str, FormValue]) -> ApiResult:
        return await self._form("shots", "POST", parameters)

    async def update_shot(self, shot_id: str, parameters: Mapping[str, Any]) -> ApiResult:
        return await self._json(f"shots/{shot_id}", "PUT", parameters)

    async def delete_shot(self, shot_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}", "DELETE")

    # -- Shot attachments ---------------------------------------------------

    async def list_shot_attachments(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/attachments")

    async def create_attachment(
        self, shot_id: str, parameters: Mapping[str, FormValue]
    ) -> ApiResult:
        return await self._form(f"shots/{shot_id}/attachments", "POST", parameters)

    async def get_attachment(self, shot_id: str, attachment_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/attachments/{attachment_id}")

    async def delete_attachment(self, shot_id: str, attachment_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}/attachments/{attachment_id}", "DELETE")

    # -- Shot buckets, projects, rebounds -----------------------------------

    async def list_shot_buckets(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/buckets")

    async def list_shot_projects(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/projects")

    async def list_shot_rebounds(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/rebounds")

    # -- Shot comments ------------------------------------------------------

    async def list_shot_comments(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/comments")

    async def list_comment_likes(self, shot_id: str, comment_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/comments/{comment_id}/likes")

    async def create_comment(self, shot_id: str, parameters: Mapping[str, Any]) -> ApiResult:
        return await self._json(f"shots/{shot_id}/comments", "POST", parameters)

    async def get_comment(self, shot_id: str, comment_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/comments/{comment_id}")

    async def update_comment(
        self, shot_id: str, comment_id: str, parameters: Mapping[str, Any]
    ) -> ApiResult:
        return await self._json(f"shots/{shot_id}/comments/{comment_id}", "PUT", parameters)

    async def delete_comment(self, shot_id: str, comment_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}/comments/{comment_id}", "DELETE")

    async def check_comment_liked(self, shot_id: str, comment_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/comments/{comment_id}/like")

    async def like_comment(self, shot_id: str, comment_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}/comments/{comment_id}/like", "POST")

    async def unlike_comment(self, shot_id: str, comment_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}/comments/{comment_id}/like", "DELETE")

    # -- Shot likes ---------------------------------------------------------

    async def list_shot_likes(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/likes")

    async def check_shot_liked(self, shot_id: str) -> ApiResult:
        return await self._get(f"shots/{shot_id}/like")

    async def like_shot(self, shot_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}/like", "POST")

    async def unlike_shot(self, shot_id: str) -> ApiResult:
        return await self.send(f"shots/{shot_id}/like", "DELETE")

    # -- Teams --------------------------------------------------------------

    async def list_team_members(self, team_id: str) -> ApiResult:
        return await self._get(f"teams/{team_id}/members")

    async def list_team_shots(self, team_id: str) -> ApiResult:
        return await self._get(f"teams/{team_id}/shots")

    # -- Users --------------------------------------------------------------

    async def get_user(self, username: str) -> ApiResult:
        return await self._get(f"users/{username}")

    async def get_authenticated_user(self) -> ApiResult:
        return await self._get("user")

    async def list_user_buckets(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "buckets"))

    async def list_followers(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "followers"))

    async def list_following(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "following"))

    async def list_following_shots(self) -> ApiResult:
        return await self._get("user/following/shots")

    async def check_following(self, username: str) -> ApiResult:
        return await self._get(f"user/following/{username}")

    async def check_user_follows(self, username: str, target_username: str) -> ApiResult:
        return await self._get(f"users/{username}/following/{target_username}")

    async def follow_user(self, username: str) -> ApiResult:
        return await self.send(f"users/{username}/follow", "PUT")

    async def unfollow_user(self, username: str) -> ApiResult:
        return await self.send(f"users/{username}/follow", "DELETE")

    async def list_user_likes(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "likes"))

    async def list_user_projects(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "projects"))

    async def list_user_shots(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "shots"))

    async def list_user_teams(self, username: str | None = None) -> ApiResult:
        return await self._get(_user_path(username, "teams"))


def _user_path(username: str | None, resource: str) -> str:
    """``users/<name>/<resource>``, or ``user/<resource>`` for the authenticated user."""
    if username:
        return f"users/{username}/{resource}"
    return f"user/{resource}"
