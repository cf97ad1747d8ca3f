from __future__ import annotations

import asyncio

import pytest

from fakes import REPO_PAYLOAD, FakeTool, b64, content_handler, make_catalog, tool_result

from repo_star_advisor.domain.entities import RepositoryMetadata
from repo_star_advisor.domain.exceptions import ToolExecutionError, ToolNotFoundError
from repo_star_advisor.domain.value_objects import RepoRef
from repo_star_advisor.services import repository_content
from repo_star_advisor.services.repository_content import (
    README_CANDIDATES,
    fetch_metadata,
    list_root_files,
    require_tool,
    resolve_readme,
    tool_data,
)
from repo_star_advisor.services.tool_catalog import GET_REPOSITORY, GET_REPOSITORY_CONTENT

REF = RepoRef(owner="y", repo="x")
METADATA = RepositoryMetadata.from_payload(REPO_PAYLOAD)


def test_metadata_is_built_from_tool_payload():
    tool = FakeTool(GET_REPOSITORY, tool_result(REPO_PAYLOAD))
    metadata = asyncio.run(fetch_metadata(make_catalog(tool), REF))

    assert tool.calls == [{"owner": "y", "repo": "x"}]
    assert metadata.name == "x"
    assert metadata.owner_login == "y"
    assert metadata.stargazers_count == 10
    assert metadata.description == "A tool for Z"


def test_metadata_defaults_for_missing_optional_fields():
    payload = {**REPO_PAYLOAD, "description": None, "language": None}
    metadata = RepositoryMetadata.from_payload(payload)
    assert metadata.description is None
    assert metadata.language is None


def test_metadata_tool_missing_reports_available_tools():
    catalog = make_catalog(FakeTool("GITHUB_LIST_ISSUES"))
    with pytest.raises(ToolNotFoundError) as info:
        asyncio.run(fetch_metadata(catalog, REF))
    assert info.value.available == ["GITHUB_LIST_ISSUES"]


def test_metadata_without_data_is_an_error():
    tool = FakeTool(GET_REPOSITORY, '{"data": null}')
    with pytest.raises(ToolExecutionError):
        asyncio.run(fetch_metadata(make_catalog(tool), REF))


@pytest.mark.parametrize(
    "override",
    [{"stargazers_count": "lots"}, {"forks_count": [1, 2]}],
)
def test_malformed_metadata_is_a_tool_error(override):
    tool = FakeTool(GET_REPOSITORY, tool_result({**REPO_PAYLOAD, **override}))
    with pytest.raises(ToolExecutionError, match="Malformed repository data"):
        asyncio.run(fetch_metadata(make_catalog(tool), REF))


def test_require_tool_hint_narrows_alternatives():
    catalog = make_catalog(
        FakeTool("GITHUB_GET_README_CONTENT"),
        FakeTool("GITHUB_LIST_ISSUES"),
    )
    with pytest.raises(ToolNotFoundError) as info:
        require_tool(catalog, GET_REPOSITORY_CONTENT, hint="content")
    assert info.value.available == ["GITHUB_GET_README_CONTENT"]


def test_tool_data_rejects_invalid_json():
    with pytest.raises(ToolExecutionError):
        tool_data("not json")


def test_readme_first_successful_candidate_wins_and_stops():
    tool = FakeTool(GET_REPOSITORY_CONTENT, content_handler({"B": "B body", "C": "C body"}))
    readme = asyncio.run(resolve_readme(tool, REF, METADATA, candidates=("A", "B", "C")))

    assert readme.text == "B body"
    assert readme.filename == "B"
    assert not readme.synthesized
    assert [call["path"] for call in tool.calls] == ["A", "B"]


def test_readme_default_order_finds_lowercase_variant():
    tool = FakeTool(GET_REPOSITORY_CONTENT, content_handler({"readme.md": "A tool for Z"}))
    readme = asyncio.run(resolve_readme(tool, REF, METADATA))

    assert readme.text == "A tool for Z"
    assert [call["path"] for call in tool.calls] == ["README.md", "readme.md"]
    assert all(call["owner"] == "y" and call["repo"] == "x" for call in tool.calls)


def test_readme_empty_content_is_skipped():
    def handle(tool_input):
        if tool_input["path"] == "README.md":
            return tool_result({"name": "README.md", "content": ""})
        return tool_result({"name": tool_input["path"], "content": b64("second")})

    tool = FakeTool(GET_REPOSITORY_CONTENT, handle)
    readme = asyncio.run(resolve_readme(tool, REF, METADATA))
    assert readme.filename == "readme.md"


def test_readme_all_candidates_fail_synthesizes_summary():
    tool = FakeTool(GET_REPOSITORY_CONTENT, RuntimeError("boom"))
    readme = asyncio.run(resolve_readme(tool, REF, METADATA))

    assert readme.synthesized
    assert "Repository: x" in readme.text
    assert "Description: A tool for Z" in readme.text
    assert "Language: Python" in readme.text
    assert len(tool.calls) == len(README_CANDIDATES)


def test_synthesized_readme_placeholders():
    metadata = RepositoryMetadata.from_payload({**REPO_PAYLOAD, "description": None, "language": None})
    text = repository_content.synthesize_readme(metadata).text
    assert "No description provided" in text
    assert "Not specified" in text


def test_decode_content_handles_github_line_breaks():
    encoded = b64("# Title\n\nSome longer text that wraps")
    wrapped = "\n".join(encoded[i : i + 20] for i in range(0, len(encoded), 20))
    assert repository_content.decode_content(wrapped) == "# Title\n\nSome longer text that wraps"


def test_root_listing_is_informational():
    root = [{"name": "src", "type": "dir"}, {"name": "README.md", "type": "file"}]
    tool = FakeTool(GET_REPOSITORY_CONTENT, content_handler({}, root=root))
    entries = asyncio.run(list_root_files(tool, REF))

    assert [(e.name, e.type) for e in entries] == [("src", "dir"), ("README.md", "file")]
    assert tool.calls == [{"owner": "y", "repo": "x", "path": ""}]


def test_root_listing_failure_returns_empty():
    tool = FakeTool(GET_REPOSITORY_CONTENT, RuntimeError("down"))
    assert asyncio.run(list_root_files(tool, REF)) == []
