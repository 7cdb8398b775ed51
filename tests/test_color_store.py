"""Tests for persisted color customizations."""

import json
import threading

from skycolor.color import BLACK, hex_to_rgb
from skycolor.color_store import (
    BACKGROUND_KEY,
    FOREGROUND_KEY,
    clear_colors,
    load_customizations,
    write_colors,
)
from skycolor.sky import SkyColors

SUNRISE_COLORS = SkyColors(background=hex_to_rgb("#ff7d75"), foreground=BLACK)


class TestLoad:
    """Tests for reading the store."""

    def test_missing_file(self, color_store_file):
        """Should return empty dict and create the parent directory."""
        assert load_customizations() == {}
        assert color_store_file.parent.is_dir()

    def test_corrupt_json(self, color_store_file):
        color_store_file.parent.mkdir(parents=True, exist_ok=True)
        color_store_file.write_text("{not json")
        assert load_customizations() == {}

    def test_not_an_object(self, color_store_file):
        color_store_file.parent.mkdir(parents=True, exist_ok=True)
        color_store_file.write_text('["#ffffff"]')
        assert load_customizations() == {}


class TestWriteColors:
    """Tests for writing sky colors."""

    def test_writes_hex_values(self, color_store_file):
        written = write_colors(SUNRISE_COLORS)

        assert written == {BACKGROUND_KEY: "#ff7d75", FOREGROUND_KEY: "#000000"}
        assert json.loads(color_store_file.read_text()) == written

    def test_preserves_other_keys(self, color_store_file):
        """Should merge into existing customizations."""
        color_store_file.parent.mkdir(parents=True, exist_ok=True)
        color_store_file.write_text(json.dumps({"editor.background": "#222222", BACKGROUND_KEY: "#000000"}))

        write_colors(SUNRISE_COLORS)

        data = json.loads(color_store_file.read_text())
        assert data["editor.background"] == "#222222"
        assert data[BACKGROUND_KEY] == "#ff7d75"
        assert data[FOREGROUND_KEY] == "#000000"

    def test_overwrites_corrupt_file(self, color_store_file):
        color_store_file.parent.mkdir(parents=True, exist_ok=True)
        color_store_file.write_text("garbage")

        write_colors(SUNRISE_COLORS)

        assert load_customizations()[BACKGROUND_KEY] == "#ff7d75"


class TestClearColors:
    """Tests for removing sky colors."""

    def test_removes_only_sky_keys(self, color_store_file):
        color_store_file.parent.mkdir(parents=True, exist_ok=True)
        color_store_file.write_text(json.dumps({
            "editor.background": "#222222",
            BACKGROUND_KEY: "#ff7d75",
            FOREGROUND_KEY: "#000000",
        }))

        assert clear_colors() is True
        assert load_customizations() == {"editor.background": "#222222"}

    def test_nothing_to_clear(self, color_store_file):
        assert clear_colors() is False
        assert not color_store_file.exists()

    def test_clear_after_write(self, color_store_file):
        write_colors(SUNRISE_COLORS)
        assert clear_colors() is True
        assert clear_colors() is False
        assert load_customizations() == {}


class TestConcurrentAccess:
    """Tests for writes from several threads at once."""

    def test_concurrent_writers_keep_other_keys(self, color_store_file):
        """Should never drop unrelated customizations while threads write and clear."""
        others = {f"editor.key{i}": "#222222" for i in range(200)}
        color_store_file.parent.mkdir(parents=True, exist_ok=True)
        color_store_file.write_text(json.dumps(others))

        errors = []

        def worker(clear: bool):
            try:
                for _ in range(100):
                    write_colors(SUNRISE_COLORS)
                    if clear:
                        clear_colors()
                    assert len(load_customizations()) >= len(others)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i % 2 == 0,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        data = json.loads(color_store_file.read_text())
        for key, value in others.items():
            assert data[key] == value

    def test_no_temp_files_left_behind(self, color_store_file):
        write_colors(SUNRISE_COLORS)
        clear_colors()

        assert [p.name for p in color_store_file.parent.iterdir()] == [color_store_file.name]
