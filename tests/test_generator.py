"""Unit tests for CommitMessageGenerator."""

from unittest.mock import Mock, patch

import pytest

from git_changes_commit.generator import (
    DEFAULT_MODEL,
    FALLBACK_MESSAGE,
    CommitMessageGenerator,
    build_openai_client,
)


def completion(content):
    resp = Mock()
    resp.choices = [Mock(message=Mock(content=content))]
    return resp


class TestCommitMessageGenerator:
    """Test cases for commit message generation."""

    def setup_method(self):
        self.client = Mock()
        self.logger = Mock()
        self.generator = CommitMessageGenerator(self.client, logger=self.logger)

    def test_returns_generated_message(self):
        """The first choice's content is returned unchanged."""
        self.client.chat.completions.create.return_value = completion("feat: add parser")

        assert self.generator.generate("summary") == "feat: add parser"

    def test_request_parameters(self):
        """The request carries the model, prompts and sampling settings."""
        self.client.chat.completions.create.return_value = completion("fix: typo")

        self.generator.generate("Git Changes Summary:\n\nstuff")

        kwargs = self.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == DEFAULT_MODEL
        assert kwargs["max_tokens"] == 100
        assert kwargs["temperature"] == 0.7
        system, user = kwargs["messages"]
        assert system["role"] == "system"
        assert "conventional commits" in system["content"]
        assert user["role"] == "user"
        assert user["content"] == (
            "Generate a concise commit message for these changes:\n"
            "Git Changes Summary:\n\nstuff"
        )

    def test_custom_model(self):
        generator = CommitMessageGenerator(self.client, model="gpt-4.1-mini")
        self.client.chat.completions.create.return_value = completion("docs: x")

        generator.generate("s")

        assert self.client.chat.completions.create.call_args.kwargs["model"] == "gpt-4.1-mini"
        assert generator.model == "gpt-4.1-mini"

    def test_service_error_falls_back(self):
        """Errors are logged and replaced by the fallback message."""
        self.client.chat.completions.create.side_effect = RuntimeError("boom")

        assert self.generator.generate("summary") == FALLBACK_MESSAGE
        self.logger.error.assert_called_once()
        assert "boom" in str(self.logger.error.call_args)

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_content_falls_back(self, content):
        """Empty model output never reaches the caller."""
        self.client.chat.completions.create.return_value = completion(content)

        assert self.generator.generate("summary") == FALLBACK_MESSAGE

    def test_no_choices_falls_back(self):
        resp = Mock()
        resp.choices = []
        self.client.chat.completions.create.return_value = resp

        assert self.generator.generate("summary") == FALLBACK_MESSAGE
        self.logger.error.assert_called_once()


class TestBuildOpenAIClient:
    @patch("git_changes_commit.generator.OpenAI")
    def test_builds_client_without_retries(self, mock_openai):
        """The client is configured with the key and no automatic retries."""
        client = build_openai_client("sk-test")

        mock_openai.assert_called_once_with(api_key="sk-test", base_url=None, max_retries=0)
        assert client is mock_openai.return_value

    @patch("git_changes_commit.generator.OpenAI")
    def test_base_url(self, mock_openai):
        build_openai_client("sk-test", "http://localhost:8080/v1")

        assert mock_openai.call_args.kwargs["base_url"] == "http://localhost:8080/v1"
