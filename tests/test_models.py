import unittest

from please.ai.models import (
    MODEL_TIERS,
    fallback_model,
    is_complex_task,
    select_best_model,
)
from please.ai.types import ModelSelectionError
from please.config import Config


class TestSelectBestModel(unittest.TestCase):
    """Tests for the model selection heuristic."""

    def test_explicit_model_wins(self):
        config = Config(model="my-model", models={"openai": "gpt-4o"})
        self.assertEqual(select_best_model(config, "list files", "openai"), "my-model")

    def test_preferred_model_per_provider(self):
        config = Config(models={"anthropic": "claude-3-opus-20240229"})
        self.assertEqual(
            select_best_model(config, "list files", "anthropic"), "claude-3-opus-20240229"
        )

    def test_simple_task_uses_fast_model(self):
        model = select_best_model(Config(), "create a hello world script", "ollama")
        self.assertEqual(model, MODEL_TIERS["ollama"]["fast"])

    def test_complex_task_uses_capable_model(self):
        model = select_best_model(Config(), "Deploy my app with Docker", "openai")
        self.assertEqual(model, MODEL_TIERS["openai"]["capable"])

    def test_long_task_is_complex(self):
        self.assertTrue(is_complex_task(" ".join(["word"] * 30)))
        self.assertFalse(is_complex_task("show the date"))

    def test_unknown_provider_raises(self):
        with self.assertRaises(ModelSelectionError):
            select_best_model(Config(), "list files", "gemini")


class TestFallbackModel(unittest.TestCase):
    """Tests for fallback_model."""

    def test_fallback_literals(self):
        self.assertEqual(fallback_model("openai"), "gpt-3.5-turbo")
        self.assertEqual(fallback_model("anthropic"), "claude-3-haiku-20240307")
        self.assertEqual(fallback_model("ollama"), "llama3.2")
        self.assertEqual(fallback_model("anything-else"), "llama3.2")
