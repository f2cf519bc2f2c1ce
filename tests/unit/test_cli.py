"""
CLI command tests
"""

import pytest
from scapy.all import IP, UDP, Ether, Raw, rdpcap, wrpcap
from typer.testing import CliRunner

from pktcrypt.cli import app
from pktcrypt.cli.commands import build_crypter_config
from pktcrypt.common.exceptions import ConfigurationError
from pktcrypt.config import AppConfig
from pktcrypt.core.key_material import derive_key

SECRET = "correct-horse-battery-staple"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def input_capture(temp_dir, target_port, client_port):
    path = temp_dir / "input.pcap"
    base = Ether(src="00:11:22:33:44:55", dst="66:77:88:99:aa:bb") / IP(src="10.0.0.1", dst="10.0.0.2")
    wrpcap(
        str(path),
        [
            base / UDP(sport=client_port, dport=target_port) / Raw(load=b"\x00\x00HELLO"),
            base / UDP(sport=1111, dport=2222) / Raw(load=b"unrelated"),
        ],
    )
    return path


class TestProcessCommand:

    def test_process_success(self, runner, input_capture, temp_dir, target_port):
        output = temp_dir / "output.pcap"
        result = runner.invoke(app, ["process", str(input_capture), str(output), SECRET, str(target_port)])

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert len(rdpcap(str(output))) == 2

    def test_verbose_shows_statistics(self, runner, input_capture, temp_dir, target_port):
        output = temp_dir / "output.pcapng"
        result = runner.invoke(
            app, ["process", str(input_capture), str(output), SECRET, f"int:{target_port}", "-v"]
        )

        assert result.exit_code == 0, result.output
        assert "inverted key: True" in result.output
        assert "Processing Statistics" in result.output
        assert "Decrypt or re-encrypt" in result.output

    def test_drop_unmatched(self, runner, input_capture, temp_dir, target_port):
        output = temp_dir / "output.pcap"
        result = runner.invoke(
            app,
            ["process", str(input_capture), str(output), SECRET, str(target_port), "--drop-unmatched"],
        )

        assert result.exit_code == 0, result.output
        assert len(rdpcap(str(output))) == 1

    @pytest.mark.parametrize("port", ["0", "70000", "http", "int:"])
    def test_bad_port(self, runner, input_capture, temp_dir, port):
        result = runner.invoke(app, ["process", str(input_capture), str(temp_dir / "o.pcap"), SECRET, port])
        assert result.exit_code == 1

    def test_short_secret(self, runner, input_capture, temp_dir, target_port):
        result = runner.invoke(
            app, ["process", str(input_capture), str(temp_dir / "o.pcap"), "short", str(target_port)]
        )
        assert result.exit_code == 1
        assert "16" in result.output

    def test_zero_rounds(self, runner, input_capture, temp_dir, target_port):
        result = runner.invoke(
            app,
            ["process", str(input_capture), str(temp_dir / "o.pcap"), SECRET, str(target_port), "--rounds", "0"],
        )
        assert result.exit_code == 1

    def test_config_with_short_key_length_rejected(self, runner, input_capture, temp_dir, target_port):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("cipher:\n  key_length: 8\n")
        output = temp_dir / "o.pcap"

        result = runner.invoke(
            app,
            ["process", str(input_capture), str(output), SECRET, str(target_port), "--config", str(config_path)],
        )

        assert result.exit_code == 1
        assert "key_length" in result.output
        assert not output.exists()

    def test_verbose_reports_invert_flag(self, runner, input_capture, temp_dir, target_port):
        result = runner.invoke(
            app,
            ["process", str(input_capture), str(temp_dir / "o.pcap"), SECRET, str(target_port), "--invert", "-v"],
        )

        assert result.exit_code == 0, result.output
        assert "inverted key: True" in result.output

    def test_verbose_reports_plain_key(self, runner, input_capture, temp_dir, target_port):
        result = runner.invoke(
            app, ["process", str(input_capture), str(temp_dir / "o.pcap"), SECRET, str(target_port), "-v"]
        )

        assert result.exit_code == 0, result.output
        assert "inverted key: False" in result.output

    def test_missing_input(self, runner, temp_dir, target_port):
        result = runner.invoke(
            app, ["process", str(temp_dir / "none.pcap"), str(temp_dir / "o.pcap"), SECRET, str(target_port)]
        )
        assert result.exit_code == 1


class TestValidateCommand:

    def test_valid_capture(self, runner, input_capture):
        result = runner.invoke(app, ["validate", str(input_capture)])
        assert result.exit_code == 0
        assert "Valid capture file" in result.output

    def test_wrong_extension(self, runner, temp_dir):
        path = temp_dir / "notes.txt"
        path.write_text("not a capture")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1

    def test_truncated_file(self, runner, temp_dir):
        path = temp_dir / "empty.pcap"
        path.write_bytes(b"\xd4\xc3\xb2\xa1")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "too small" in result.output

    def test_missing_file(self, runner, temp_dir):
        result = runner.invoke(app, ["validate", str(temp_dir / "missing.pcap")])
        assert result.exit_code == 1


class TestConfigCommand:

    def test_shows_settings(self, runner, temp_dir):
        result = runner.invoke(app, ["config", "--config", str(temp_dir / "missing.yaml")])
        assert result.exit_code == 0
        assert "schedule_rounds: 1" in result.output

    def test_init_writes_default_file(self, runner, temp_dir):
        path = temp_dir / "nested" / "config.yaml"
        result = runner.invoke(app, ["config", "--config", str(path), "--init"])

        assert result.exit_code == 0, result.output
        assert path.exists()
        assert AppConfig.load(path).cipher.schedule_rounds == 1

    def test_init_keeps_existing_file(self, runner, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("cipher:\n  schedule_rounds: 3\n")
        result = runner.invoke(app, ["config", "--config", str(path), "--init"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert "schedule_rounds: 3" in result.output

    def test_invalid_config_fails(self, runner, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("cipher:\n  schedule_rounds: 0\n")
        result = runner.invoke(app, ["config", "--config", str(path)])
        assert result.exit_code == 1


class TestBuildCrypterConfig:

    def test_settings_flow_into_crypter_config(self, target_port):
        config = AppConfig.default()
        config.cipher.schedule_rounds = 3

        crypter_config = build_crypter_config(config, SECRET, str(target_port))

        assert crypter_config.key == derive_key(SECRET)
        assert crypter_config.target_port == target_port
        assert crypter_config.schedule_rounds == 3
        assert crypter_config.pass_through_unmatched is True

    def test_rounds_option_overrides_settings(self, target_port):
        crypter_config = build_crypter_config(AppConfig.default(), SECRET, str(target_port), rounds=5)
        assert crypter_config.schedule_rounds == 5

    def test_invert_flag_and_prefix_agree(self, target_port):
        by_flag = build_crypter_config(AppConfig.default(), SECRET, str(target_port), invert=True)
        by_prefix = build_crypter_config(AppConfig.default(), SECRET, f"int:{target_port}")
        assert by_flag.key == by_prefix.key == derive_key(SECRET, invert=True)
        assert by_flag.inverted_key is True
        assert by_prefix.inverted_key is True
        assert build_crypter_config(AppConfig.default(), SECRET, str(target_port)).inverted_key is False

    def test_drop_unmatched(self, target_port):
        crypter_config = build_crypter_config(
            AppConfig.default(), SECRET, str(target_port), drop_unmatched=True
        )
        assert crypter_config.pass_through_unmatched is False

    def test_key_length_setting_must_be_sixteen(self, target_port):
        config = AppConfig.default()
        config.cipher.key_length = 8

        with pytest.raises(ConfigurationError) as exc_info:
            build_crypter_config(config, "abcdefghijklmnopq", str(target_port))

        assert exc_info.value.config_key == "key_length"

    def test_negative_rounds_rejected(self, target_port):
        with pytest.raises(ConfigurationError):
            build_crypter_config(AppConfig.default(), SECRET, str(target_port), rounds=-1)
