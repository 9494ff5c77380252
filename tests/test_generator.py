"""Tests for clock cue generation and WebVTT assembly."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from services.flash_clock.generator import (
    HORIZON_SECONDS,
    RENDER_HINT,
    ClockCueGenerator,
)
from shared.enums import ClockMode, TimeFormat
from shared.models import ClockConfig, Cue


@pytest.fixture
def generator() -> ClockCueGenerator:
    return ClockCueGenerator()


class TestFlashMode:
    """Periodic cues every repeat interval."""

    def test_default_cue_count(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(), base_instant)
        assert len(cues) == 720

    @pytest.mark.parametrize("interval,expected", [(10, 4320), (60, 720), (300, 144), (7, 6172)])
    def test_cue_count_is_ceiling_of_horizon_over_interval(
        self, generator: ClockCueGenerator, base_instant: datetime, interval: int, expected: int
    ) -> None:
        clock_config = ClockConfig(repeat_interval_seconds=interval)
        cues = generator.generate(clock_config, base_instant)
        assert len(cues) == expected

    def test_cue_spans(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(flash_duration_seconds=5, repeat_interval_seconds=30), base_instant)
        assert (cues[0].start_offset, cues[0].end_offset) == (Decimal(0), Decimal(5))
        assert (cues[1].start_offset, cues[1].end_offset) == (Decimal(30), Decimal(35))

    def test_text_tracks_elapsed_time(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(), base_instant)
        assert cues[0].text == "13:05"
        assert cues[1].text == "13:06"
        assert cues[60].text == "14:05"

    def test_twelve_hour_text(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(time_format=TimeFormat.H12), base_instant)
        assert cues[0].text == "1:05 PM"
        # 11 hours later crosses midnight
        assert cues[660].text == "12:05 AM"

    def test_last_cue_end_is_not_clipped(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(flash_duration_seconds=10, repeat_interval_seconds=7), base_instant)
        last = cues[-1]
        assert last.start_offset < HORIZON_SECONDS
        assert last.end_offset == last.start_offset + 10
        assert last.end_offset > HORIZON_SECONDS
        assert last.end_offset - HORIZON_SECONDS <= 10 - 1

    def test_unknown_mode_behaves_like_flash(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        bogus = ClockConfig.model_construct(mode="bogus")
        assert generator.generate(bogus, base_instant) == generator.generate(ClockConfig(), base_instant)


class TestContinuousModes:
    """One cue per second across the horizon."""

    def test_always_on(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(mode=ClockMode.ALWAYS_ON), base_instant)
        assert len(cues) == HORIZON_SECONDS
        assert all(cue.end_offset - cue.start_offset == 1 for cue in cues)
        assert cues[-1].end_offset == HORIZON_SECONDS

    def test_subliminal_width(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(mode=ClockMode.SUBLIMINAL), base_instant)
        assert len(cues) == HORIZON_SECONDS
        assert all(cue.end_offset - cue.start_offset == Decimal("0.05") for cue in cues)

    def test_text_changes_on_the_minute(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(mode=ClockMode.ALWAYS_ON), base_instant)
        # base is 13:05:30, so the minute rolls over after 30 seconds
        assert cues[29].text == "13:05"
        assert cues[30].text == "13:06"


class TestSequenceInvariants:
    """Ordering, uniqueness and render hint."""

    @pytest.mark.parametrize("mode", list(ClockMode))
    def test_indices_and_starts_increase(
        self, generator: ClockCueGenerator, base_instant: datetime, mode: ClockMode
    ) -> None:
        cues = generator.generate(ClockConfig(mode=mode), base_instant)
        assert [cue.index for cue in cues] == list(range(1, len(cues) + 1))
        assert all(a.start_offset < b.start_offset for a, b in zip(cues, cues[1:]))
        assert {cue.render_hint for cue in cues} == {RENDER_HINT}

    def test_deterministic(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        clock_config = ClockConfig(mode=ClockMode.SUBLIMINAL, time_format=TimeFormat.H12)
        assert generator.generate(clock_config, base_instant) == generator.generate(clock_config, base_instant)
        assert generator.build_document(clock_config, base_instant) == generator.build_document(
            clock_config, base_instant
        )

    def test_aware_base_instant_keeps_its_zone(self, generator: ClockCueGenerator) -> None:
        base = datetime(2024, 6, 1, 22, 30, tzinfo=timezone(timedelta(hours=2)))
        cues = generator.generate(ClockConfig(repeat_interval_seconds=3600), base)
        assert cues[0].text == "22:30"
        assert cues[2].text == "00:30"

    @pytest.mark.parametrize("mode", list(ClockMode))
    def test_generated_cues_pass_model_validation(
        self, base_instant: datetime, mode: ClockMode
    ) -> None:
        cues = ClockCueGenerator(horizon=600).generate(ClockConfig(mode=mode), base_instant)
        for cue in cues:
            assert Cue.model_validate(cue.model_dump()) == cue
            assert isinstance(cue.start_offset, Decimal)
            assert isinstance(cue.end_offset, Decimal)

    def test_custom_horizon(self, base_instant: datetime) -> None:
        cues = ClockCueGenerator(horizon=120).generate(ClockConfig(), base_instant)
        assert len(cues) == 2


class TestConvertToVtt:
    """Document layout."""

    def test_header_and_cue_blocks(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        document = generator.build_document(ClockConfig(), base_instant)
        assert document.startswith(
            "WEBVTT\n\n"
            "1\n"
            "00:00:00.000 --> 00:00:10.000 line:5% position:95% align:end\n"
            "13:05\n\n"
            "2\n"
            "00:01:00.000 --> 00:01:10.000 line:5% position:95% align:end\n"
            "13:06\n\n"
        )
        assert document.endswith(
            "720\n"
            "11:59:00.000 --> 11:59:10.000 line:5% position:95% align:end\n"
            "01:04\n\n"
        )

    def test_subliminal_timing_lines(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        document = generator.build_document(ClockConfig(mode=ClockMode.SUBLIMINAL), base_instant)
        assert "\n00:00:03.000 --> 00:00:03.050 line:5% position:95% align:end\n" in document
        assert "\n11:59:59.000 --> 11:59:59.050 line:5% position:95% align:end\n" in document

    def test_empty_sequence(self) -> None:
        assert ClockCueGenerator.convert_to_vtt([]) == "WEBVTT\n\n"

    def test_block_count_matches_cues(self, generator: ClockCueGenerator, base_instant: datetime) -> None:
        cues = generator.generate(ClockConfig(repeat_interval_seconds=300), base_instant)
        document = generator.convert_to_vtt(cues)
        blocks = document.split("\n\n")
        # header, one block per cue, trailing empty string after the final separator
        assert len(blocks) == len(cues) + 2
        assert blocks[-1] == ""

    def test_assembles_arbitrary_cues(self) -> None:
        cues = [
            Cue(index=1, start_offset=Decimal("3661.5"), end_offset=Decimal("3662"), text="x", render_hint="align:start"),
        ]
        assert ClockCueGenerator.convert_to_vtt(cues) == (
            "WEBVTT\n\n1\n01:01:01.500 --> 01:01:02.000 align:start\nx\n\n"
        )
