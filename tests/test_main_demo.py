"""Argument handling of the main_demo entry point."""

from unittest.mock import patch

import pytest

import main_demo
from clouddetect.exceptions import InvalidTimeoutError


class TestParseTimeout:
    def test_default_when_no_argument(self):
        assert main_demo.parse_timeout(["main_demo.py"]) == 5

    def test_numeric_argument(self):
        assert main_demo.parse_timeout(["main_demo.py", "2.5"]) == 2.5

    def test_non_numeric_argument_is_invalid_timeout(self):
        with pytest.raises(InvalidTimeoutError):
            main_demo.parse_timeout(["main_demo.py", "soon"])


class TestMain:
    def test_non_numeric_argument_exits_with_message(self, capsys):
        with patch.object(main_demo, "main_cloud_detect_demo") as demo:
            assert main_demo.main(["main_demo.py", "soon"]) == 2

        demo.assert_not_called()
        assert "Invalid timeout" in capsys.readouterr().out

    def test_rejected_timeout_exits_with_message(self, capsys, mock_request):
        assert main_demo.main(["main_demo.py", "-1"]) == 2
        assert "Invalid timeout" in capsys.readouterr().out
        mock_request.assert_not_called()
