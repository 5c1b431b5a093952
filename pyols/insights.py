"""
Natural-language commentary on a fitted model.

Text generation sits behind ``InsightGenerator`` so the numeric core never
depends on it. ``OllamaInsightGenerator`` talks to a local Ollama server and
needs the optional ``ollama`` package (``pip install pyols[insights]``).
"""

import warnings
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ._core.lm_solver import ModelMetrics
from ._core.predict import FeatureImportance

MISSING_GENERATOR_MESSAGE = (
    "No insight generator is configured. Pass a generator, for example "
    "OllamaInsightGenerator(), to enable model commentary."
)
EMPTY_INSIGHTS_MESSAGE = "No insights generated."
FAILED_INSIGHTS_MESSAGE = "Failed to generate insights due to an API error."


class InsightGenerator(ABC):
    """Turns a prompt into free text."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        pass


class OllamaInsightGenerator(InsightGenerator):
    """
    Insight generator backed by ``ollama.chat``.

    Parameters
    ----------
    model : str
        Ollama model tag
    options : dict, optional
        Sampling options forwarded to Ollama
    """

    def __init__(self, model: str = "gemma3:12b", options: Optional[dict] = None):
        try:
            from ollama import chat
        except ImportError:
            raise ImportError(
                "Ollama not installed.\n"
                "Install: pip install pyols[insights]"
            )
        self._chat = chat
        self.model = model
        self.options = options if options is not None else {"temperature": 0.2}

    def generate(self, prompt: str) -> str:
        resp = self._chat(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            options=self.options,
        )
        try:
            return resp.message.content or ""
        except AttributeError as exc:
            raise RuntimeError(f"Unexpected Ollama response shape: {resp!r}") from exc


def build_insight_prompt(
    metrics: ModelMetrics,
    importance: Sequence[FeatureImportance],
    target_name: str,
) -> str:
    """Prompt describing the fit quality and the coefficients."""
    coef_lines = "\n".join(f"- {f.name}: {f.importance:.4f}" for f in importance)
    return (
        f"I have trained a linear regression model to predict '{target_name}'.\n"
        f"\n"
        f"Here are the model performance metrics:\n"
        f"- R-Squared (R2): {metrics.r2:.4f}\n"
        f"- Root Mean Squared Error (RMSE): {metrics.rmse:.2f}\n"
        f"\n"
        f"Here are the top feature coefficients (importance):\n"
        f"{coef_lines}\n"
        f"\n"
        f"Please provide a concise, user-friendly analysis of these results.\n"
        f"1. Interpret the R2 score (is it good?).\n"
        f"2. Explain which features drive the {target_name} up or down the most "
        f"based on the coefficients.\n"
        f"3. Give a brief recommendation on data quality or what else could be "
        f"collected to improve the model.\n"
        f"\n"
        f"Keep the tone professional but accessible to a non-technical user.\n"
    )


def generate_model_insights(
    metrics: ModelMetrics,
    importance: Sequence[FeatureImportance],
    target_name: str,
    generator: Optional[InsightGenerator] = None,
) -> str:
    """
    Commentary on a fitted model, or a fallback message.

    Never raises for generator failures; they are reported as a warning
    and a fixed message.
    """
    if generator is None:
        return MISSING_GENERATOR_MESSAGE

    prompt = build_insight_prompt(metrics, importance, target_name)
    try:
        text = generator.generate(prompt)
    except Exception as e:
        warnings.warn(f"Insight generation failed: {e}", UserWarning, stacklevel=2)
        return FAILED_INSIGHTS_MESSAGE
    return text or EMPTY_INSIGHTS_MESSAGE
