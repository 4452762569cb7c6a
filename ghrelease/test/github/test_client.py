"""Tests for ghrelease.github.client against MockHttpClient."""

from __future__ import annotations

import base64

from ghrelease.core.result import Err, Ok
from ghrelease.github.client import (
    DEFAULT_API_URL,
    connect,
    create_file,
    create_release,
    get_file_content,
    get_repository,
    update_file,
)
from ghrelease.github.http import MockHttpClient
from ghrelease.github.model import GitHubSession, NotesFile, ReleaseDraft, Repository

API = "https://ghe.example.com/api/v3"
REPO_URL = f"{API}/repos/Ontotext-AD/release-test"


def _session(http: MockHttpClient) -> GitHubSession:
    result = connect(API, "test-user", "test-pass", http=http)
    assert isinstance(result, Ok)
    return result.value


def _repo() -> Repository:
    return Repository(owner="Ontotext-AD", name="release-test", full_name="Ontotext-AD/release-test")


def _contents(text: str, *, sha: str = "3d21ec53a331a6f037a91c368710b99387d012c1") -> dict[str, object]:
    return {
        "type": "file",
        "encoding": "base64",
        "sha": sha,
        "content": base64.encodebytes(text.encode("utf-8")).decode("ascii"),
        "download_url": "https://raw.example.com/Ontotext-AD/release-test/master/RELEASE-NOTES.md",
    }


class TestConnect:
    def test_default_endpoint(self) -> None:
        result = connect(None, "u", "p", http=MockHttpClient())
        assert isinstance(result, Ok)
        assert result.value.api_url == DEFAULT_API_URL

    def test_blank_api_url_uses_default(self) -> None:
        result = connect("   ", "u", "p", http=MockHttpClient())
        assert isinstance(result, Ok)
        assert result.value.api_url == "https://api.github.com"

    def test_enterprise_endpoint_strips_trailing_slash(self) -> None:
        result = connect(API + "/", "u", "p", http=MockHttpClient())
        assert isinstance(result, Ok)
        assert result.value.api_url == API

    def test_invalid_url(self) -> None:
        result = connect("ftp://example.com", "u", "p", http=MockHttpClient())
        assert isinstance(result, Err)
        assert result.error.kind == "connection_failed"

    def test_sends_no_request(self) -> None:
        http = MockHttpClient()
        connect(API, "u", "p", http=http)
        assert http.calls == []

    def test_repr_hides_password(self) -> None:
        session = _session(MockHttpClient())
        assert "test-pass" not in repr(session)


class TestGetRepository:
    def test_ok_with_basic_auth(self) -> None:
        http = MockHttpClient()
        http.respond(
            "GET",
            REPO_URL,
            {"full_name": "Ontotext-AD/release-test", "default_branch": "master"},
        )

        result = get_repository(_session(http), "Ontotext-AD", "release-test")

        assert isinstance(result, Ok)
        assert result.value.full_name == "Ontotext-AD/release-test"
        assert result.value.default_branch == "master"
        expected = "Basic " + base64.b64encode(b"test-user:test-pass").decode("ascii")
        assert http.calls[0].headers["Authorization"] == expected

    def test_not_found(self) -> None:
        result = get_repository(_session(MockHttpClient()), "Ontotext-AD", "missing")
        assert isinstance(result, Err)
        assert result.error.kind == "not_found"
        assert result.error.status == 404

    def test_unauthorized(self) -> None:
        http = MockHttpClient()
        http.fail("GET", REPO_URL, 401, "Bad credentials")

        result = get_repository(_session(http), "Ontotext-AD", "release-test")

        assert isinstance(result, Err)
        assert result.error.kind == "auth_failed"

    def test_missing_owner_sends_nothing(self) -> None:
        http = MockHttpClient()
        result = get_repository(_session(http), None, "release-test")
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
        assert http.calls == []

    def test_anonymous_session_has_no_auth_header(self) -> None:
        http = MockHttpClient()
        http.respond("GET", REPO_URL, {})
        session = connect(API, None, None, http=http)
        assert isinstance(session, Ok)

        get_repository(session.value, "Ontotext-AD", "release-test")

        assert "Authorization" not in http.calls[0].headers


class TestGetFileContent:
    def test_decodes_inline_content(self) -> None:
        http = MockHttpClient()
        http.respond(
            "GET", f"{REPO_URL}/contents/RELEASE-NOTES.md?ref=master", _contents("Next release\n")
        )

        result = get_file_content(_session(http), _repo(), "RELEASE-NOTES.md", "master")

        assert isinstance(result, Ok)
        assert result.value == NotesFile(
            path="RELEASE-NOTES.md",
            branch="master",
            raw_content="Next release\n",
            sha="3d21ec53a331a6f037a91c368710b99387d012c1",
        )

    def test_nested_path_and_ref_are_quoted(self) -> None:
        http = MockHttpClient()
        http.respond(
            "GET", f"{REPO_URL}/contents/docs/NOTES.md?ref=release%2F1.x", _contents("x")
        )

        result = get_file_content(_session(http), _repo(), "docs/NOTES.md", "release/1.x")

        assert isinstance(result, Ok)
        assert result.value.raw_content == "x"

    def test_falls_back_to_download_url(self) -> None:
        http = MockHttpClient()
        payload = _contents("")
        payload["encoding"] = "none"
        payload["content"] = ""
        http.respond("GET", f"{REPO_URL}/contents/RELEASE-NOTES.md?ref=master", payload)
        http.respond("GET", str(payload["download_url"]), "big notes\n")

        result = get_file_content(_session(http), _repo(), "RELEASE-NOTES.md", "master")

        assert isinstance(result, Ok)
        assert result.value.raw_content == "big notes\n"
        assert len(http.calls) == 2

    def test_not_found(self) -> None:
        result = get_file_content(
            _session(MockHttpClient()), _repo(), "RELEASE-NOTES.md", "master"
        )
        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_directory_is_rejected(self) -> None:
        http = MockHttpClient()
        http.respond("GET", f"{REPO_URL}/contents/docs?ref=master", [{"name": "a.md"}])

        result = get_file_content(_session(http), _repo(), "docs", "master")

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_response"

    def test_invalid_utf8(self) -> None:
        http = MockHttpClient()
        payload = _contents("")
        payload["content"] = base64.b64encode(b"\xff\xfe\xfa").decode("ascii")
        http.respond("GET", f"{REPO_URL}/contents/RELEASE-NOTES.md?ref=master", payload)

        result = get_file_content(_session(http), _repo(), "RELEASE-NOTES.md", "master")

        assert isinstance(result, Err)
        assert "UTF-8" in result.error.message


class TestCreateRelease:
    def test_posts_draft_payload(self) -> None:
        http = MockHttpClient()
        http.respond(
            "POST",
            f"{REPO_URL}/releases",
            {"id": 7, "tag_name": "1.0.0", "name": "1.0.0", "html_url": "https://x/1.0.0"},
        )
        draft = ReleaseDraft.for_tag("1.0.0", "master", "notes body")

        result = create_release(_session(http), _repo(), draft)

        assert isinstance(result, Ok)
        assert result.value.id == 7
        assert result.value.html_url == "https://x/1.0.0"
        assert http.calls[0].body == {
            "tag_name": "1.0.0",
            "name": "1.0.0",
            "target_commitish": "master",
            "body": "notes body",
            "draft": False,
            "prerelease": False,
        }

    def test_body_omitted_when_unset(self) -> None:
        http = MockHttpClient()
        http.respond("POST", f"{REPO_URL}/releases", {"id": 1})

        create_release(_session(http), _repo(), ReleaseDraft.for_tag("1.0.0", "master", None))

        body = http.calls[0].body
        assert body is not None
        assert "body" not in body

    def test_duplicate_tag(self) -> None:
        http = MockHttpClient()
        http.fail("POST", f"{REPO_URL}/releases", 422, "Validation Failed")

        result = create_release(_session(http), _repo(), ReleaseDraft.for_tag("1.0.0", "master", None))

        assert isinstance(result, Err)
        assert result.error.kind == "request_failed"
        assert result.error.status == 422
        assert "Validation Failed" in result.error.pretty()


class TestWriteFile:
    def test_update_sends_sha(self) -> None:
        http = MockHttpClient()
        http.respond("PUT", f"{REPO_URL}/contents/RELEASE-NOTES.md", {"content": {}})
        current = NotesFile(path="RELEASE-NOTES.md", branch="master", raw_content="x", sha="abc")

        result = update_file(_session(http), _repo(), current, "new", "msg", "master")

        assert isinstance(result, Ok)
        body = http.calls[0].body
        assert body == {
            "message": "msg",
            "content": base64.b64encode(b"new").decode("ascii"),
            "branch": "master",
            "sha": "abc",
        }

    def test_create_sends_no_sha(self) -> None:
        http = MockHttpClient()
        http.respond("PUT", f"{REPO_URL}/contents/RELEASE-NOTES.md", {"content": {}})

        result = create_file(_session(http), _repo(), "RELEASE-NOTES.md", "new", "msg", "master")

        assert isinstance(result, Ok)
        body = http.calls[0].body
        assert body is not None
        assert "sha" not in body
        assert body["branch"] == "master"

    def test_conflict(self) -> None:
        http = MockHttpClient()
        http.fail("PUT", f"{REPO_URL}/contents/RELEASE-NOTES.md", 409, "Conflict")
        current = NotesFile(path="RELEASE-NOTES.md", branch="master", raw_content="x", sha="old")

        result = update_file(_session(http), _repo(), current, "new", "msg", "master")

        assert isinstance(result, Err)
        assert result.error.status == 409
