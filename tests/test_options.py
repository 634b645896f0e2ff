"""Per-operation config parsing from the untyped bag."""

from __future__ import annotations

import logging

import pytest

from azureaifoundry.errors import ConfigurationError
from azureaifoundry.options import (
    ChatConfig,
    ImageConfig,
    SpeechConfig,
    TranscriptionConfig,
)

pytestmark = pytest.mark.unit


def test_chat_config_reads_recognized_keys() -> None:
    cfg = ChatConfig.from_bag(
        {"maxOutputTokens": 256, "temperature": 0.2, "topP": 1, "toolChoice": "auto"}
    )

    assert cfg.max_tokens == 256
    assert cfg.temperature == 0.2
    assert cfg.top_p == 1.0
    assert isinstance(cfg.top_p, float)
    assert cfg.tool_choice == "auto"


def test_unknown_keys_are_ignored_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="azureaifoundry.options"):
        cfg = ChatConfig.from_bag({"stopSequences": ["\n"], "temperature": 0.5})

    assert cfg == ChatConfig(temperature=0.5)
    assert "stopSequences" in caplog.text


@pytest.mark.parametrize(
    ("bag", "expected"),
    [
        ({"maxOutputTokens": "100"}, None),
        ({"maxOutputTokens": 1.5}, None),
        ({"maxOutputTokens": True}, None),
    ],
)
def test_int_keys_reject_wrong_types(bag: dict[str, object], expected: object) -> None:
    assert ChatConfig.from_bag(bag).max_tokens == expected


def test_bool_is_not_a_number() -> None:
    assert ChatConfig.from_bag({"temperature": True}).temperature is None


def test_integer_is_accepted_as_number() -> None:
    assert SpeechConfig.from_bag({"speed": 2}).speed == 2.0


@pytest.mark.parametrize("bag", [None, "not-a-mapping", 42, ["n", 2]])
def test_non_mapping_bags_yield_defaults(bag: object) -> None:
    assert ImageConfig.from_bag(bag) == ImageConfig()


def test_ready_instance_passes_through() -> None:
    cfg = ImageConfig(quality="hd")
    assert ImageConfig.from_bag(cfg) is cfg


def test_null_values_keep_defaults() -> None:
    assert ImageConfig.from_bag({"size": None}).size == "1024x1024"


# =============================================================================
# Modality Defaults
# =============================================================================


def test_image_defaults() -> None:
    cfg = ImageConfig.from_bag({})
    assert (cfg.n, cfg.size, cfg.quality, cfg.style, cfg.response_format) == (
        1,
        "1024x1024",
        "standard",
        "vivid",
        "url",
    )


@pytest.mark.parametrize(
    ("bag", "quality"),
    [
        ({}, "standard"),
        ({"quality": "hd"}, "hd"),
        ({"quality": 42}, "standard"),
    ],
)
def test_image_quality_override(bag: dict[str, object], quality: str) -> None:
    assert ImageConfig.from_bag(bag).quality == quality


def test_speech_defaults() -> None:
    cfg = SpeechConfig.from_bag({})
    assert (cfg.voice, cfg.response_format, cfg.speed) == ("alloy", "mp3", 1.0)


def test_transcription_defaults_and_overrides() -> None:
    assert TranscriptionConfig.from_bag({}).response_format == "json"

    cfg = TranscriptionConfig.from_bag(
        {"language": "uk", "prompt": "names: Kyiv", "response_format": "text", "temperature": 0}
    )

    assert cfg.language == "uk"
    assert cfg.prompt == "names: Kyiv"
    assert cfg.response_format == "text"
    assert cfg.temperature == 0.0


# =============================================================================
# Direct Construction
# =============================================================================


def test_direct_construction_validates_types() -> None:
    with pytest.raises(ConfigurationError, match="voice must be a string"):
        SpeechConfig(voice=3)  # type: ignore[arg-type]


def test_direct_construction_rejects_bool_for_int() -> None:
    with pytest.raises(ConfigurationError, match="n must be an integer"):
        ImageConfig(n=True)


@pytest.mark.parametrize(
    ("tool_choice", "effective"),
    [("auto", "auto"), ("required", "required"), ("none", "none"), ("any", None), (None, None)],
)
def test_effective_tool_choice(tool_choice: str | None, effective: str | None) -> None:
    assert ChatConfig(tool_choice=tool_choice).effective_tool_choice == effective
