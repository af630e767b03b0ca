import pytest

from otpgen import otp_cli

from .conftest import SEED_SHA1


@pytest.fixture(autouse=True)
def no_env_secret(monkeypatch):
    monkeypatch.delenv(otp_cli.SECRET_ENV, raising=False)


def test_hotp_command(capsys):
    rc = otp_cli.main(["hotp", "--secret", SEED_SHA1, "--counter", "1"])
    assert rc == 0
    assert capsys.readouterr().out == "HOTP(counter=1): 287082\n"


def test_hotp_command_digits(capsys):
    rc = otp_cli.main(["hotp", "--secret", SEED_SHA1, "--counter", "7", "--digits", "10"])
    assert rc == 0
    assert "0082162583" in capsys.readouterr().out


def test_totp_command_with_time(capsys):
    rc = otp_cli.main([
        "totp", "--secret", SEED_SHA1, "--time", "59", "--digits", "8", "--algorithm", "SHA1",
    ])
    assert rc == 0
    assert capsys.readouterr().out == "TOTP: 94287082  (valid ~ 1s)\n"


def test_totp_command_reads_injected_clock(capsys):
    rc = otp_cli.main(
        ["totp", "--secret", SEED_SHA1, "--digits", "8", "--algorithm", "sha1"],
        clock=lambda: 1111111109.5,
    )
    assert rc == 0
    assert capsys.readouterr().out == "TOTP: 07081804  (valid ~ 1s)\n"


def test_secret_from_environment(capsys, monkeypatch):
    monkeypatch.setenv(otp_cli.SECRET_ENV, SEED_SHA1)
    rc = otp_cli.main(["hotp", "--counter", "9"])
    assert rc == 0
    assert capsys.readouterr().out == "HOTP(counter=9): 520489\n"


def test_missing_secret(capsys):
    rc = otp_cli.main(["hotp", "--counter", "0"])
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[!] no secret key provided" in captured.err


def test_bad_secret(capsys):
    rc = otp_cli.main(["totp", "--secret", "not base32!", "--time", "59"])
    assert rc == 1
    assert "[!] bad secret key" in capsys.readouterr().err


def test_unsupported_algorithm(capsys):
    rc = otp_cli.main(["totp", "--secret", SEED_SHA1, "--time", "59", "--algorithm", "MD5"])
    assert rc == 1
    assert "SHA1/SHA256/SHA512" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert otp_cli.main([]) == 0
    assert "usage: otpgen" in capsys.readouterr().out


def test_counter_is_required():
    with pytest.raises(SystemExit) as exc:
        otp_cli.main(["hotp", "--secret", SEED_SHA1])
    assert exc.value.code == 2


def test_digits_above_ten_rejected(capsys):
    rc = otp_cli.main(["hotp", "--secret", SEED_SHA1, "--counter", "0", "--digits", "11"])
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "digits must be at most 10" in captured.err
