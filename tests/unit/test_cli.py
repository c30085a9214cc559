"""
Unit tests for the command-line front end.
"""

import gzip

import pytest

from httpeditor.__main__ import build_parser, main


@pytest.fixture
def request_file(tmp_path, sample_post_request: bytes):
    path = tmp_path / "request.http"
    path.write_bytes(sample_post_request)
    return path


@pytest.fixture
def response_file(tmp_path, sample_gzip_response: bytes):
    path = tmp_path / "response.http"
    path.write_bytes(sample_gzip_response)
    return path


def read_text(path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


class TestRender:
    """Tests for the render command."""

    def test_render_to_stdout(self, request_file, capsys):
        assert main(["render", str(request_file), "--log-level", "ERROR"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("POST /api/users HTTP/1.1\nHost: localhost:8080\n")

    def test_render_to_file(self, request_file, tmp_path):
        output = tmp_path / "request.txt"

        assert main(["render", str(request_file), "-o", str(output)]) == 0

        assert read_text(output).endswith("\n\nname=John\r\nemail=john@example.com\nok")

    def test_render_gzip_response(self, response_file, tmp_path, gzip_body_text):
        output = tmp_path / "response.txt"

        assert main(["render", "--response", str(response_file), "-o", str(output)]) == 0

        assert read_text(output).endswith("\n\n" + gzip_body_text)

    def test_render_unreadable_body(self, tmp_path, capsys):
        path = tmp_path / "broken.http"
        path.write_bytes(b"HTTP/1.1 200 OK\r\nContent-Encoding: gzip\r\n\r\nnot gzip")

        assert main(["render", "-r", str(path)]) == 1

        assert "could not be decoded" in capsys.readouterr().err

    def test_malformed_message_file(self, tmp_path, capsys):
        path = tmp_path / "broken.http"
        path.write_bytes(b"no header terminator")

        assert main(["render", str(path)]) == 1

        assert "Error" in capsys.readouterr().err

    def test_missing_message_file(self, tmp_path, capsys):
        """Test an unreadable message file is reported, not raised."""
        missing = tmp_path / "missing.http"

        assert main(["render", str(missing)]) == 1

        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert "missing.http" in err

    def test_invalid_utf8_body_to_stdout(self, tmp_path, capsysbinary):
        """Test bytes the charset cannot decode are written out as they are."""
        path = tmp_path / "response.http"
        path.write_bytes(b"HTTP/1.1 200 OK\r\nContent-Type: text/plain; charset=UTF-8\r\n\r\n\xffok")

        assert main(["render", "-r", str(path), "-l", "ERROR"]) == 0

        assert capsysbinary.readouterr().out.endswith(b"\n\n\xffok")

    def test_invalid_charset(self, request_file, capsys):
        assert main(["render", "--charset", "no-such-charset", str(request_file)]) == 2

        assert "Unknown charset" in capsys.readouterr().err


class TestApply:
    """Tests for the apply command."""

    def test_render_then_apply_round_trip(self, request_file, tmp_path, sample_post_request):
        text = tmp_path / "request.txt"
        output = tmp_path / "edited.http"

        assert main(["render", str(request_file), "-o", str(text)]) == 0
        assert main(["apply", str(request_file), str(text), "-o", str(output)]) == 0

        assert output.read_bytes() == sample_post_request

    def test_apply_edit(self, request_file, tmp_path):
        text = tmp_path / "request.txt"
        output = tmp_path / "edited.http"
        write_text(text, "PUT /api/users/1 HTTP/1.1\nHost: example.com\n\nname=Jane\r\n")

        assert main(["apply", str(request_file), str(text), "-o", str(output)]) == 0

        assert output.read_bytes() == (
            b"PUT /api/users/1 HTTP/1.1\r\nHost: example.com\r\n\r\nname=Jane\r\n"
        )

    def test_apply_gzip_response(self, response_file, tmp_path):
        text = tmp_path / "response.txt"
        output = tmp_path / "edited.http"
        write_text(text, "HTTP/1.1 200 OK\nContent-Encoding: gzip\n\n{\"edited\": true}")

        assert main(["apply", "-r", str(response_file), str(text), "-o", str(output)]) == 0

        header, body = output.read_bytes().split(b"\r\n\r\n", 1)
        assert header == b"HTTP/1.1 200 OK\r\nContent-Encoding: gzip"
        assert gzip.decompress(body) == b'{"edited": true}'

    def test_missing_text_file(self, request_file, tmp_path, capsys):
        """Test an unreadable text file is reported and nothing is written."""
        output = tmp_path / "edited.http"

        code = main(["apply", str(request_file), str(tmp_path / "missing.txt"), "-o", str(output)])

        assert code == 1
        assert "missing.txt" in capsys.readouterr().err
        assert not output.exists()

    def test_invalid_utf8_body_round_trip(self, tmp_path):
        """Test undecodable body bytes survive render to file and apply."""
        raw = b"HTTP/1.1 200 OK\r\nContent-Type: text/plain; charset=UTF-8\r\n\r\n\xff\xfeabc"
        message = tmp_path / "response.http"
        message.write_bytes(raw)
        text = tmp_path / "response.txt"
        output = tmp_path / "edited.http"

        assert main(["render", "-r", str(message), "-o", str(text)]) == 0
        assert main(["apply", "-r", str(message), str(text), "-o", str(output)]) == 0

        assert output.read_bytes() == raw

    def test_apply_invalid_edit(self, request_file, tmp_path, capsys):
        text = tmp_path / "request.txt"
        output = tmp_path / "edited.http"
        write_text(text, "Malformed Header\n\nbody")

        assert main(["apply", str(request_file), str(text), "-o", str(output)]) == 1

        assert "malformed" in capsys.readouterr().err
        assert not output.exists()


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_apply_needs_text_file(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["apply", "message.http"])
