"""Tests for bootstrap: app factory, FileServer, CLI root validation."""

from unittest.mock import MagicMock, patch

from arcbrowse.config import Settings
from arcbrowse.main import FileServer, create_app, main


class TestCreateApp:
    def test_root_stored_on_state(self, tmp_path):
        app = create_app(root=str(tmp_path))
        assert app.state.root_dir == str(tmp_path)

    def test_defaults_to_configured_root(self):
        with patch("arcbrowse.main.settings") as mock_settings:
            mock_settings.root_dir = "/srv/files"
            mock_settings.cors_origins = []
            mock_settings.app_name = "arcbrowse"
            mock_settings.debug = False
            app = create_app()
        assert app.state.root_dir == "/srv/files"

    def test_no_docs_routes(self, tmp_path):
        app = create_app(root=str(tmp_path))
        assert app.docs_url is None
        assert app.openapi_url is None


class TestFileServer:
    @patch("uvicorn.run")
    def test_listen(self, mock_run, tmp_path):
        server = FileServer(str(tmp_path))
        server.listen("8080", "127.0.0.1")
        args, kwargs = mock_run.call_args
        assert args[0] is server.app
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8080

    @patch("uvicorn.run")
    def test_listen_to_port_uses_configured_host(self, mock_run, tmp_path):
        server = FileServer(str(tmp_path))
        with patch("arcbrowse.main.settings") as mock_settings:
            mock_settings.host = "0.0.0.0"
            mock_settings.log_level = "INFO"
            server.listen_to_port(60000)
        assert mock_run.call_args.kwargs["host"] == "0.0.0.0"
        assert mock_run.call_args.kwargs["port"] == 60000


class TestMain:
    def test_missing_root(self, tmp_path):
        assert main([str(tmp_path / "missing")]) == 1

    def test_root_is_file(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        assert main([str(f)]) == 1

    @patch("arcbrowse.main.FileServer")
    def test_serves_root(self, mock_server_cls, tmp_path):
        server = MagicMock()
        mock_server_cls.return_value = server

        assert main([str(tmp_path), "--host", "127.0.0.1", "--port", "9999"]) == 0

        mock_server_cls.assert_called_once_with(str(tmp_path.resolve()))
        server.listen.assert_called_once_with(9999, "127.0.0.1")


class TestSettings:
    def test_cors_origins_from_comma_string(self):
        s = Settings(cors_origins="http://a, http://b")
        assert s.cors_origins == ["http://a", "http://b"]

    def test_relative_root_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        s = Settings(root_dir="served")
        assert s.root_dir == str(tmp_path.resolve() / "served")

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ARCBROWSE_ARCHIVE_COMMAND", "7za")
        monkeypatch.setenv("ARCBROWSE_CLEANUP_SCRATCH", "false")
        s = Settings()
        assert s.archive_command == "7za"
        assert s.cleanup_scratch is False
