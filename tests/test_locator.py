from dataclasses import replace

from radioarchive.locator import find_capture_files, parse_capture_name

from conftest import make_event


def touch(config, day: str, *times: str):
    day_dir = config.source_dir / day
    day_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for t in times:
        path = day_dir / f"{day}_{t}.wav"
        path.write_bytes(b"")
        paths.append(path)
    return paths


def names(paths):
    return [p.name for p in paths]


def test_parse_capture_name_flexible_separators():
    assert parse_capture_name("2025-04-06_10-00-00.wav") == ("2025-04-06", "10:00:00")
    assert parse_capture_name("rec 2025-04-06 10:00:00.wav") == ("2025-04-06", "10:00:00")
    assert parse_capture_name("2025-04-06T100000.wav") == ("2025-04-06", "10:00:00")
    assert parse_capture_name("notes.wav") is None


def test_selects_last_file_before_start_and_files_inside_window(config):
    touch(config, "2025-04-06", "08-00-00", "09-00-00", "10-00-00", "11-00-00", "12-00-00")

    files = find_capture_files(make_event(), config)

    assert names(files) == ["2025-04-06_10-00-00.wav", "2025-04-06_11-00-00.wav"]


def test_file_starting_exactly_at_window_start_opens_window(config):
    touch(config, "2025-04-06", "09-00-00", "10-15-00", "11-00-00")

    files = find_capture_files(make_event(), config)

    assert names(files) == ["2025-04-06_10-15-00.wav", "2025-04-06_11-00-00.wav"]


def test_file_starting_at_window_end_is_excluded(config):
    touch(config, "2025-04-06", "10-00-00", "11-00-00", "11-30-00")

    files = find_capture_files(make_event(), config)

    assert "2025-04-06_11-30-00.wav" not in names(files)


def test_result_is_chronological_regardless_of_creation_order(config):
    touch(config, "2025-04-06", "11-00-00", "10-00-00")

    files = find_capture_files(make_event(), config)

    assert names(files) == sorted(names(files))
    assert names(files) == ["2025-04-06_10-00-00.wav", "2025-04-06_11-00-00.wav"]


def test_malformed_and_non_wav_files_are_skipped(config):
    touch(config, "2025-04-06", "10-00-00")
    day_dir = config.source_dir / "2025-04-06"
    (day_dir / "garbage.wav").write_bytes(b"")
    (day_dir / "2025-04-06_11-00-00.mp3").write_bytes(b"")

    files = find_capture_files(make_event(), config)

    assert names(files) == ["2025-04-06_10-00-00.wav"]


def test_no_matching_files_returns_empty(config):
    touch(config, "2025-04-06", "14-00-00", "15-00-00")

    assert find_capture_files(make_event(), config) == []


def test_missing_directory_returns_empty(config):
    assert find_capture_files(make_event(), config) == []


def test_midnight_spanning_event_scans_both_days(config):
    touch(config, "2025-04-06", "22-00-00", "23-00-00")
    touch(config, "2025-04-07", "00-00-00", "01-00-00")
    event = make_event(
        start_datetime="2025-04-06 23:50:00", end_datetime="2025-04-07 00:20:00",
    )

    files = find_capture_files(event, config)

    assert names(files) == ["2025-04-06_23-00-00.wav", "2025-04-07_00-00-00.wav"]


def test_offset_shifts_search_window(config):
    touch(config, "2025-04-06", "10-00-00", "11-00-00", "11-30-00")
    event = make_event(start_datetime="2025-04-06 10:15:00", end_datetime="2025-04-06 11:29:00")

    without = find_capture_files(event, config)
    shifted = find_capture_files(event, replace(config, offset=120))

    assert "2025-04-06_11-30-00.wav" not in names(without)
    assert "2025-04-06_11-30-00.wav" in names(shifted)


def test_offset_can_push_window_into_next_day(config):
    touch(config, "2025-04-06", "23-00-00")
    touch(config, "2025-04-07", "00-00-00")
    event = make_event(start_datetime="2025-04-06 23:30:00", end_datetime="2025-04-06 23:59:00")

    files = find_capture_files(event, replace(config, offset=300))

    assert names(files) == ["2025-04-06_23-00-00.wav", "2025-04-07_00-00-00.wav"]
