"""Tests for ConfigBuilder layering."""

from pathlib import Path

from mediaproc.config.builder import ConfigBuilder, ConfigSource, source_from_file


class TestConfigBuilder:
    def test_later_source_wins_for_set_values(self) -> None:
        builder = ConfigBuilder()
        builder.apply(
            ConfigSource(pipeline_threads=2, pipeline_width=720), source_name="file"
        )
        builder.apply(ConfigSource(pipeline_threads=8), source_name="env")

        config = builder.build()

        assert config.pipeline.threads == 8
        assert config.pipeline.width == 720
        assert builder.source_of("pipeline_threads") == "env"
        assert builder.source_of("pipeline_width") == "file"
        assert builder.source_of("storage_root") == "default"

    def test_source_from_file_reads_sections(self) -> None:
        source = source_from_file(
            {
                "tools": {"ffmpeg": "~/bin/ffmpeg"},
                "storage": {"remote_url": "https://cdn.example.com"},
                "logging": {"format": "json", "file": ""},
            }
        )

        assert source.ffmpeg_path == Path("~/bin/ffmpeg").expanduser()
        assert source.storage_remote_url == "https://cdn.example.com"
        assert source.logging_format == "json"
        assert source.logging_file is None
        assert source.pipeline_width is None
