import os
import unittest
from unittest.mock import patch

from please.ai.generator import generate_script
from please.ai.llm import LLMCompletionResponse
from please.ai.prompts import build_messages
from please.ai.providers import (
    PROVIDERS,
    AnthropicProvider,
    OllamaProvider,
    OpenAIProvider,
    get_provider,
)
from please.ai.types import (
    ConfigInvalid,
    ProviderError,
    ScriptRequest,
    UnsupportedProvider,
)
from please.config import Config, create_default_config


class TestProviderRegistry(unittest.TestCase):
    """Tests for get_provider and the provider registry."""

    def test_registry_holds_the_three_known_providers(self):
        self.assertEqual(set(PROVIDERS), {"ollama", "openai", "anthropic"})

    def test_get_provider_returns_matching_instance(self):
        config = create_default_config()
        self.assertIsInstance(get_provider("ollama", config), OllamaProvider)
        self.assertIsInstance(get_provider("OpenAI", config), OpenAIProvider)
        self.assertIsInstance(get_provider(" anthropic ", config), AnthropicProvider)

    @patch("please.ai.providers.base.LLMClient")
    def test_unknown_provider_is_rejected_without_network(self, MockLLMClient):
        """Unknown names fail with UnsupportedProvider and never build a client."""
        config = create_default_config()
        for name in ("gemini", "", "local", "ollama2"):
            with self.assertRaises(UnsupportedProvider) as cm:
                get_provider(name, config)
            self.assertIn("unsupported provider", str(cm.exception))

        request = ScriptRequest("list files", "bash", "gemini", "some-model")
        with self.assertRaises(UnsupportedProvider):
            generate_script(config, request)

        MockLLMClient.assert_not_called()


class TestIsConfigured(unittest.TestCase):
    """Tests for the per-provider configuration checks."""

    @patch.dict(os.environ, {"OLLAMA_HOST": ""})
    def test_ollama_defaults_to_localhost(self):
        config = Config()
        self.assertTrue(OllamaProvider(config).is_configured(config))

    def test_ollama_rejects_malformed_url(self):
        config = Config(provider_configs={"ollama": {"api_url": "localhost-without-scheme"}})
        self.assertFalse(OllamaProvider(config).is_configured(config))

    @patch.dict(os.environ, {"OPENAI_API_KEY": ""})
    def test_openai_requires_api_key(self):
        config = create_default_config()
        self.assertFalse(OpenAIProvider(config).is_configured(config))

        config.provider_configs["openai"]["api_key"] = "sk-test"
        self.assertTrue(OpenAIProvider(config).is_configured(config))

    @patch.dict(os.environ, {"ANTHROPIC_API_KEY": "sk-ant-env"})
    def test_anthropic_reads_key_from_environment(self):
        config = create_default_config()
        provider = AnthropicProvider(config)
        self.assertTrue(provider.is_configured(config))
        self.assertEqual(provider.client_settings()["api_key"], "sk-ant-env")

    @patch.dict(os.environ, {"ANTHROPIC_API_KEY": "   "})
    def test_anthropic_blank_key_is_not_configured(self):
        config = Config()
        self.assertFalse(AnthropicProvider(config).is_configured(config))


class TestGenerateScriptDispatch(unittest.TestCase):
    """Tests for generate_script in please.ai.generator."""

    @patch.dict(os.environ, {"OPENAI_API_KEY": ""})
    @patch.object(OpenAIProvider, "generate_script")
    def test_unconfigured_provider_never_generates(self, mock_generate):
        config = create_default_config()
        request = ScriptRequest("list files", "bash", "openai", "gpt-4o-mini")

        with self.assertRaises(ConfigInvalid) as cm:
            generate_script(config, request)

        self.assertIn("provider openai is not properly configured", str(cm.exception))
        mock_generate.assert_not_called()

    @patch.object(OllamaProvider, "generate_script")
    def test_configured_provider_is_called_with_request(self, mock_generate):
        config = create_default_config()
        request = ScriptRequest("list files", "bash", "ollama", "llama3.2")

        result = generate_script(config, request)

        mock_generate.assert_called_once_with(request)
        self.assertIs(result, mock_generate.return_value)


class TestProviderGenerateScript(unittest.TestCase):
    """Tests for the shared request/response flow of Provider.generate_script."""

    def setUp(self):
        patcher = patch("please.ai.providers.base.LLMClient", autospec=True)
        self.MockLLMClient = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_llm = self.MockLLMClient.return_value

    def _reply(self, content):
        self.mock_llm.completion.return_value = LLMCompletionResponse(
            assistant_message={"role": "assistant", "content": content}
        )

    def test_ollama_generates_script_from_json_reply(self):
        self._reply('{"script": "echo \\"Hello, World!\\"", "explanation": "Prints a greeting."}')
        config = create_default_config()
        request = ScriptRequest("create a hello world script", "bash", "ollama", "llama3.2")

        response = OllamaProvider(config).generate_script(request)

        self.MockLLMClient.assert_called_once_with({"ollama": {"api_url": "http://localhost:11434"}})
        self.mock_llm.completion.assert_called_once_with(
            model="ollama:llama3.2", messages=build_messages(request)
        )
        self.assertEqual(response.script, 'echo "Hello, World!"')
        self.assertEqual(response.explanation, "Prints a greeting.")
        self.assertEqual(response.provider, "ollama")
        self.assertEqual(response.model, "llama3.2")
        self.assertEqual(response.script_type, "bash")
        self.assertEqual(response.task_description, "create a hello world script")

    def test_openai_sends_key_and_temperature(self):
        self._reply("```bash\nls -la\n```\nLists every file.")
        config = Config(provider_configs={"openai": {"api_key": "sk-test"}})
        request = ScriptRequest("list files", "bash", "openai", "gpt-4o-mini")

        response = OpenAIProvider(config).generate_script(request)

        self.MockLLMClient.assert_called_once_with({"openai": {"api_key": "sk-test"}})
        call_kwargs = self.mock_llm.completion.call_args.kwargs
        self.assertEqual(call_kwargs["model"], "openai:gpt-4o-mini")
        self.assertEqual(call_kwargs["temperature"], 0.2)
        self.assertEqual(response.script, "ls -la")
        self.assertEqual(response.explanation, "Lists every file.")

    def test_anthropic_sends_max_tokens(self):
        self._reply('{"script": "Get-ChildItem", "explanation": ""}')
        config = Config(provider_configs={"anthropic": {"api_key": "sk-ant"}})
        request = ScriptRequest("list files", "powershell", "anthropic", "claude-3-haiku-20240307")

        response = AnthropicProvider(config).generate_script(request)

        call_kwargs = self.mock_llm.completion.call_args.kwargs
        self.assertEqual(call_kwargs["model"], "anthropic:claude-3-haiku-20240307")
        self.assertIn("max_tokens", call_kwargs)
        self.assertEqual(response.script, "Get-ChildItem")
        self.assertEqual(response.script_type, "powershell")

    def test_network_failure_is_wrapped_in_provider_error(self):
        self.mock_llm.completion.side_effect = ConnectionError("connection refused")
        config = create_default_config()
        request = ScriptRequest("list files", "bash", "ollama", "llama3.2")

        with self.assertRaises(ProviderError) as cm:
            OllamaProvider(config).generate_script(request)

        self.assertIn("Ollama request failed", str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, ConnectionError)

    def test_empty_reply_raises_provider_error(self):
        self._reply(None)
        config = create_default_config()
        request = ScriptRequest("list files", "bash", "ollama", "llama3.2")

        with self.assertRaises(ProviderError):
            OllamaProvider(config).generate_script(request)

    def test_request_for_another_provider_is_rejected(self):
        config = create_default_config()
        request = ScriptRequest("list files", "bash", "openai", "gpt-4o")

        with self.assertRaises(ProviderError):
            OllamaProvider(config).generate_script(request)

        self.mock_llm.completion.assert_not_called()
