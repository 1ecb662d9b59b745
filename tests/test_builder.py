"""Tests for builder module."""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from hostblock.builder import HostsBuilder
from hostblock.exceptions import AbortedError, FetchError, FetcherUnavailableError
from hostblock.writer import FallbackWriter


def fetch_from(pages):
    """Build a fetch side effect serving a dict of URL -> content or exception."""

    def fetch(url):
        page = pages[url]
        if isinstance(page, Exception):
            raise page
        return page

    return fetch


class TestCollect:
    """Tests for HostsBuilder.collect."""

    def test_sources_in_order(self, bare_config, mock_fetcher):
        config = replace(bare_config, sources=("http://a", "http://b"))
        mock_fetcher.fetch.side_effect = fetch_from({"http://a": "a.com", "http://b": "b.com"})

        texts = HostsBuilder(mock_fetcher, MagicMock()).collect(config)

        assert texts == ["a.com", "b.com"]
        assert [c.args[0] for c in mock_fetcher.fetch.call_args_list] == ["http://a", "http://b"]

    def test_failure_confirmed(self, bare_config, mock_fetcher):
        """Test a failed source is skipped when the user continues."""
        config = replace(bare_config, sources=("http://a", "http://b"))
        mock_fetcher.fetch.side_effect = fetch_from(
            {"http://a": FetchError("HTTP error 404: http://a"), "http://b": "b.com"}
        )
        confirm = MagicMock(return_value=True)

        texts = HostsBuilder(mock_fetcher, confirm).collect(config)

        assert texts == ["b.com"]
        confirm.assert_called_once()
        assert "http://a" in confirm.call_args.args[0]

    def test_failure_declined(self, bare_config, mock_fetcher):
        """Test declining stops before later sources are fetched."""
        config = replace(bare_config, sources=("http://a", "http://b"))
        mock_fetcher.fetch.side_effect = fetch_from(
            {"http://a": FetchError("boom"), "http://b": "b.com"}
        )
        confirm = MagicMock(return_value=False)

        with pytest.raises(AbortedError, match="http://a"):
            HostsBuilder(mock_fetcher, confirm).collect(config)

        assert mock_fetcher.fetch.call_count == 1

    def test_empty_response_is_a_failure(self, bare_config, mock_fetcher):
        config = replace(bare_config, sources=("http://a",))
        mock_fetcher.fetch.side_effect = fetch_from({"http://a": "  \n\n"})
        confirm = MagicMock(return_value=False)

        with pytest.raises(AbortedError):
            HostsBuilder(mock_fetcher, confirm).collect(config)

        confirm.assert_called_once()

    def test_no_sources(self, bare_config, mock_fetcher):
        config = replace(bare_config, sources=())
        assert HostsBuilder(mock_fetcher, MagicMock()).collect(config) == []
        mock_fetcher.fetch.assert_not_called()


class TestBuild:
    """Tests for HostsBuilder.build."""

    def test_duplicates_across_sources(self, bare_config, mock_fetcher):
        config = replace(bare_config, sources=("http://a", "http://b"))
        mock_fetcher.fetch.side_effect = fetch_from(
            {"http://a": "0.0.0.0 track.example.com\n", "http://b": "track.example.com\n"}
        )

        lines = HostsBuilder(mock_fetcher, MagicMock()).build(config)

        assert lines == ["0.0.0.0 track.example.com"]


class TestRun:
    """Tests for HostsBuilder.run."""

    def test_end_to_end(self, temp_dir, bare_config, mock_fetcher, fixed_now):
        output = temp_dir / "hosts"
        config = replace(
            bare_config,
            output=str(output),
            header="127.0.0.1 localhost",
            blacklist=("extra.com",),
        )
        mock_fetcher.fetch.return_value = "0.0.0.0 bad.com\n# comment\ngood.ignored.com"

        count = HostsBuilder(mock_fetcher, MagicMock(), FallbackWriter()).run(config, now=fixed_now)

        assert count == 3
        assert output.read_text() == (
            "# 2024-01-02T03:04:05+00:00\n"
            "# <header>\n"
            "127.0.0.1 localhost\n"
            "# </header>\n"
            "# <blocklist>\n"
            "0.0.0.0 bad.com\n"
            "0.0.0.0 extra.com\n"
            "0.0.0.0 good.ignored.com\n"
            "# </blocklist>\n"
        )

    def test_fetcher_unavailable(self, temp_dir, bare_config, mock_fetcher):
        output = temp_dir / "hosts"
        config = replace(bare_config, output=str(output))
        mock_fetcher.available.return_value = False

        with pytest.raises(FetcherUnavailableError):
            HostsBuilder(mock_fetcher, MagicMock()).run(config)

        mock_fetcher.fetch.assert_not_called()
        assert not output.exists()

    def test_abort_leaves_output_untouched(self, temp_dir, bare_config, mock_fetcher):
        output = temp_dir / "hosts"
        output.write_text("original\n")
        config = replace(bare_config, output=str(output))
        mock_fetcher.fetch.side_effect = FetchError("boom")
        writer = MagicMock()

        with pytest.raises(AbortedError):
            HostsBuilder(mock_fetcher, MagicMock(return_value=False), writer).run(config)

        writer.write.assert_not_called()
        assert output.read_text() == "original\n"
