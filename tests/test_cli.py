"""Tests for the command-line entry point."""

from speech_to_text import cli


def test_parser_options():
    args = cli.build_parser().parse_args(
        ["--credentials", "sa.json", "--duration", "3", "--language", "en-GB", "--audio", "clip.wav"]
    )
    assert args.credentials == "sa.json"
    assert args.duration == 3.0
    assert args.language == "en-GB"
    assert args.audio == "clip.wav"


def test_missing_credentials_exit_code(tmp_path):
    assert cli.main(["--credentials", str(tmp_path / "missing.json"), "--audio", "clip.wav"]) == 1


def test_unreadable_audio_exit_code(credential_file, tmp_path):
    assert cli.main(["--credentials", str(credential_file), "--audio", str(tmp_path / "missing.wav")]) == 1
