"""Tests for the CLI and the end-to-end session flow."""

import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from recordscreen import cli
from recordscreen.command import build_ffmpeg_args
from recordscreen.config import RecorderConfig
from recordscreen.errors import DeviceSelectionAborted, NoCandidates
from recordscreen.executor import RecordingResult
from recordscreen.types import Both, NoAudio

NOW = datetime(2024, 5, 17, 14, 3, 9)


class TestConfigureSession:
    """End-to-end resolution with scripted choices."""

    def test_scenario_single_screen_no_audio(self, make_chooser, primary_screen, output_dir):
        """One screen, no audio devices, Medium quality: only the quality prompt."""
        chooser = make_chooser([1])
        spec = cli.configure_session([primary_screen], [], [], chooser, output_dir, NOW)

        assert [c[1] for c in chooser.calls] == ["Quality> "]
        assert spec.audio == NoAudio()
        assert len(spec.inputs) == 1
        assert spec.maps == ("0:v",)
        assert (spec.quality.crf, spec.quality.encoder_preset,
                spec.quality.audio_bitrate_kbps) == (28, "veryfast", 192)
        assert spec.output_path.parent == output_dir
        assert output_dir.is_dir()

    def test_scenario_both_high(self, make_chooser, primary_screen, usb_mic,
                                speakers_monitor, output_dir):
        """One screen, one mic, one monitor, Both, High."""
        chooser = make_chooser([3, 0])
        spec = cli.configure_session([primary_screen], [usb_mic], [speakers_monitor],
                                     chooser, output_dir, NOW)

        assert spec.audio == Both(mic=usb_mic, system=speakers_monitor)
        assert len(spec.inputs) == 3
        assert [i.device.display_name for i in spec.audio_inputs] == ["USB Mic", "Monitor of Speakers"]
        assert spec.mix.input_indices == (1, 2)
        assert spec.quality.label == "High"

    def test_declined_device_produces_no_spec(self, make_chooser, primary_screen, usb_mic,
                                              speakers_monitor, hdmi_monitor, output_dir):
        """Choosing Both then declining the system device aborts before synthesis."""
        chooser = make_chooser([3, None])
        with patch.object(cli, "synthesize") as mock_synth:
            with pytest.raises(DeviceSelectionAborted):
                cli.configure_session([primary_screen], [usb_mic],
                                      [speakers_monitor, hdmi_monitor], chooser, output_dir, NOW)
        mock_synth.assert_not_called()
        assert not output_dir.exists()

    def test_no_screens(self, make_chooser, output_dir):
        """No screens raises NoCandidates."""
        with pytest.raises(NoCandidates):
            cli.configure_session([], [], [], make_chooser(), output_dir, NOW)

    def test_idempotent_except_output_path(self, make_chooser, primary_screen, side_screen,
                                           usb_mic, speakers_monitor, tmp_path):
        """Same enumeration and same answers give the same command."""
        specs = []
        for i in range(2):
            chooser = make_chooser([1, 3, 0])
            specs.append(cli.configure_session(
                [primary_screen, side_screen], [usb_mic], [speakers_monitor],
                chooser, tmp_path / f"run{i}", NOW,
            ))
        a, b = specs
        assert a.output_path != b.output_path
        args_a = build_ffmpeg_args(a)[:-1]
        args_b = build_ffmpeg_args(b)[:-1]
        assert args_a == args_b
        assert (a.screen, a.audio, a.quality, a.inputs, a.mix, a.maps) == \
               (b.screen, b.audio, b.quality, b.inputs, b.mix, b.maps)


@pytest.fixture
def config(output_dir: Path) -> RecorderConfig:
    return RecorderConfig(output_dir=output_dir, display=":0.0", chooser=None,
                          ffmpeg="ffmpeg", verbose=False)


class TestMain:
    """Tests for the command-line entry point."""

    def test_version(self, capsys):
        """--version prints the program version."""
        with pytest.raises(SystemExit) as exc:
            cli.main(["--version"])
        assert exc.value.code == 0
        assert "record-screen" in capsys.readouterr().out

    def test_list_screens(self, capsys, primary_screen, side_screen):
        """--list-screens lists connected screens."""
        with patch.object(cli, "list_screens", return_value=[primary_screen, side_screen]):
            assert cli.main(["--list-screens"]) == 0
        assert "2 screen" in capsys.readouterr().out

    def test_list_screens_none(self, capsys):
        """--list-screens fails when nothing is connected."""
        with patch.object(cli, "list_screens", return_value=[]):
            assert cli.main(["--list-screens"]) == 1

    def test_list_audio(self, capsys, usb_mic, speakers_monitor):
        """--list-audio lists both pools."""
        with patch.object(cli, "list_audio_devices", return_value=([usb_mic], [speakers_monitor])):
            assert cli.main(["--list-audio"]) == 0
        out = capsys.readouterr().out
        assert "USB Mic" in out and "Monitor of Speakers" in out

    def test_dry_run(self, capsys, make_chooser, primary_screen, config):
        """--dry-run prints the command without recording."""
        with patch.object(cli, "load_config", return_value=config), \
             patch.object(cli, "default_chooser", return_value=make_chooser([0])), \
             patch.object(cli, "list_screens", return_value=[primary_screen]), \
             patch.object(cli, "list_audio_devices", return_value=([], [])), \
             patch.object(cli, "run_recording") as mock_run:
            assert cli.main(["--dry-run"]) == 0
        mock_run.assert_not_called()
        out = capsys.readouterr().out
        assert out.startswith("ffmpeg -hide_banner -f x11grab")
        assert "-crf 18" in out

    def test_no_screens_exits_nonzero(self, capsys, make_chooser, config):
        """Session ends with status 1 when no screens exist."""
        with patch.object(cli, "load_config", return_value=config), \
             patch.object(cli, "default_chooser", return_value=make_chooser()), \
             patch.object(cli, "list_screens", return_value=[]), \
             patch.object(cli, "list_audio_devices", return_value=([], [])), \
             patch.object(cli, "run_recording") as mock_run:
            assert cli.main([]) == 1
        mock_run.assert_not_called()
        assert "No connected screens" in capsys.readouterr().err

    def test_records_and_reports(self, capsys, make_chooser, primary_screen, config):
        """Successful recording reports the saved file."""
        def fake_run(spec, **kwargs):
            return RecordingResult(spec.output_path, 5 * 1024 * 1024, 255, interrupted=True)

        with patch.object(cli, "load_config", return_value=config), \
             patch.object(cli, "default_chooser", return_value=make_chooser([2])), \
             patch.object(cli, "list_screens", return_value=[primary_screen]), \
             patch.object(cli, "list_audio_devices", return_value=([], [])), \
             patch.object(cli, "run_recording", side_effect=fake_run):
            assert cli.main([]) == 0
        assert "(5.0 MB)" in capsys.readouterr().out

    def test_ffmpeg_failure(self, capsys, make_chooser, primary_screen, config):
        """ffmpeg failure exits non-zero."""
        def fake_run(spec, **kwargs):
            return RecordingResult(spec.output_path, None, 1)

        with patch.object(cli, "load_config", return_value=config), \
             patch.object(cli, "default_chooser", return_value=make_chooser([2])), \
             patch.object(cli, "list_screens", return_value=[primary_screen]), \
             patch.object(cli, "list_audio_devices", return_value=([], [])), \
             patch.object(cli, "run_recording", side_effect=fake_run):
            assert cli.main([]) == 1
        assert "exit code 1" in capsys.readouterr().err

    def test_unknown_chooser(self, capsys, config):
        """Unknown configured chooser exits non-zero."""
        bad = RecorderConfig(output_dir=config.output_dir, display=":0.0", chooser="rofi",
                             ffmpeg="ffmpeg", verbose=False)
        with patch.object(cli, "load_config", return_value=bad):
            assert cli.main([]) == 1
        assert "Unknown chooser" in capsys.readouterr().err
