"""Helpers for configuring the DSPy language model that backs every handler."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Protocol, runtime_checkable

import dspy

from econta.core.config import ModelConfig


class DSPyConfigurationError(RuntimeError):
    """Raised when DSPy cannot be configured for the requested run."""


class ModelError(RuntimeError):
    """Raised when the model backend fails (transport, auth, quota or empty reply)."""


@runtime_checkable
class TextGenerator(Protocol):
    def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        ...


def _resolve_api_key(model_cfg: ModelConfig) -> str | None:
    preferred_envs: List[str] = []
    if model_cfg.api_key_env:
        preferred_envs.append(model_cfg.api_key_env)
    preferred_envs.append(f"{model_cfg.provider.upper()}_API_KEY")
    for env_var in preferred_envs:
        if env_var and (value := os.getenv(env_var)):
            return value
    return None


def _resolve_api_base(model_cfg: ModelConfig) -> str | None:
    if model_cfg.api_base:
        return model_cfg.api_base
    env_candidates: List[str] = []
    if model_cfg.api_base_env:
        env_candidates.append(model_cfg.api_base_env)
    env_candidates.append(f"{model_cfg.provider.upper()}_API_BASE")
    for env_var in env_candidates:
        if env_var and (value := os.getenv(env_var)):
            return value
    return None


def build_language_model(model_cfg: ModelConfig, *, api_key: str | None = None) -> object:
    """Instantiate a ``dspy.LM`` for the configured model id."""

    key = api_key or _resolve_api_key(model_cfg)
    if not key:
        expected_env = model_cfg.api_key_env or f"{model_cfg.provider.upper()}_API_KEY"
        raise DSPyConfigurationError(f"Missing API key for model {model_cfg.model}; set {expected_env}.")

    kwargs: Dict[str, Any] = {
        "model": model_cfg.model,
        "max_tokens": model_cfg.max_tokens,
        "api_key": key,
    }
    if model_cfg.temperature is not None:
        kwargs["temperature"] = model_cfg.temperature
    api_base = _resolve_api_base(model_cfg)
    if api_base:
        kwargs["api_base"] = api_base
    if model_cfg.extra_kwargs:
        kwargs.update(model_cfg.extra_kwargs)
    return dspy.LM(**kwargs)


class DSPyTextGenerator:
    """Adapt a DSPy LM handle to the ``generate(prompt, system_prompt)`` contract."""

    def __init__(self, lm: object, *, default_system_prompt: str | None = None) -> None:
        self.lm = lm
        self.default_system_prompt = default_system_prompt

    def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        messages = []
        system = system_prompt or self.default_system_prompt
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        try:
            outputs = self.lm(messages=messages)
        except Exception as exc:  # noqa: BLE001 - every backend failure surfaces as ModelError
            raise ModelError(f"Model API error: {exc}") from exc

        text = _first_text(outputs)
        if not text:
            raise ModelError("No text response from model")
        return text


def _first_text(outputs: Any) -> str | None:
    if isinstance(outputs, str):
        return outputs
    if not outputs:
        return None
    first = outputs[0]
    if isinstance(first, dict):
        first = first.get("text")
    return first if isinstance(first, str) else None


def configure_text_generator(model_cfg: ModelConfig, *, api_key: str | None = None) -> DSPyTextGenerator:
    """Build the LM, register it as the DSPy default and wrap it for handlers."""

    lm = build_language_model(model_cfg, api_key=api_key)
    dspy.settings.configure(lm=lm)
    return DSPyTextGenerator(lm)


__all__ = [
    "DSPyConfigurationError",
    "DSPyTextGenerator",
    "ModelError",
    "TextGenerator",
    "build_language_model",
    "configure_text_generator",
]
