"""Unit tests for the polyembed command-line interface."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from polyembed.cli.embed import _build_parser, _run
from polyembed.config.settings import Settings
from polyembed.models.embedding import ModelInfo
from polyembed.providers.embedding.factory import EmbeddingProviderFactory
from polyembed.utils.errors import BackendUnreachableError


def _mock_factory() -> EmbeddingProviderFactory:
    return EmbeddingProviderFactory(settings=Settings(mock_embeddings=True))


class TestBuildParser:
    def test_embed_arguments(self) -> None:
        args = _build_parser().parse_args(["--pretty", "embed", "one", "two", "--summary"])
        assert args.command == "embed"
        assert args.texts == ["one", "two"]
        assert args.summary is True
        assert args.pretty is True

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args([])

    def test_embed_requires_text(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["embed"])


class TestRun:
    def test_providers(self, capsys: pytest.CaptureFixture[str]) -> None:
        args = _build_parser().parse_args(["providers"])
        assert _run(args, _mock_factory()) == 0
        assert json.loads(capsys.readouterr().out) == [
            "default",
            "mock",
            "openai",
            "ollama",
            "openrouter",
        ]

    def test_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        args = _build_parser().parse_args(["info"])
        assert _run(args, _mock_factory()) == 0
        assert json.loads(capsys.readouterr().out) == {
            "provider": "mock",
            "name": "polyembed-mock",
            "dimensions": 1536,
            "version": "1.0.0",
        }

    def test_embed_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        args = _build_parser().parse_args(["embed", "alpha", "beta", "--summary"])
        assert _run(args, _mock_factory()) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["provider"] == "mock"
        assert [item["text"] for item in output["embeddings"]] == ["alpha", "beta"]
        for item in output["embeddings"]:
            assert item["length"] == 1536
            assert item["norm"] == pytest.approx(1.0)

    def test_embed_full_vectors(self, capsys: pytest.CaptureFixture[str]) -> None:
        args = _build_parser().parse_args(["embed", "alpha"])
        assert _run(args, _mock_factory()) == 0

        output = json.loads(capsys.readouterr().out)
        assert len(output["embeddings"]) == 1
        assert len(output["embeddings"][0]) == 1536

    def test_stdout_holds_only_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("OLLAMA_BASE_URL", "http://localhost:11434")
        args = _build_parser().parse_args(["info"])

        assert _run(args, EmbeddingProviderFactory()) == 0

        out = capsys.readouterr().out
        assert "embedding_provider_resolving" not in out
        assert json.loads(out)["provider"] == "ollama"

    def test_provider_error_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        provider = MagicMock()
        provider.generate_embedding = AsyncMock(
            side_effect=BackendUnreachableError("server not reachable", provider_name="ollama")
        )
        provider.aclose = AsyncMock()
        provider.get_provider_name.return_value = "ollama"
        provider.get_model_info.return_value = ModelInfo(name="nomic-embed-text", dimensions=768)
        factory = MagicMock(spec=EmbeddingProviderFactory)
        factory.create_from_environment.return_value = provider

        args = _build_parser().parse_args(["embed", "alpha"])
        assert _run(args, factory) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: [ollama] server not reachable" in captured.err
        provider.aclose.assert_awaited_once()

    def test_configuration_error_exit_code(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("EMBEDDING_PROVIDER", "openrouter")
        args = _build_parser().parse_args(["info"])

        assert _run(args, EmbeddingProviderFactory()) == 1
        assert "OPENROUTER_API_KEY" in capsys.readouterr().err
