import shutil

import ffmpeg
import pytest

from core import transcode

needs_ffmpeg = pytest.mark.skipif(shutil.which('ffmpeg') is None, reason='ffmpeg not installed')

def test_convert_if_needed_skips_existing_output(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(transcode, 'convert', lambda *args: calls.append(args))

    output = tmp_path / 'out.wav'
    output.write_bytes(b'already converted')
    assert not transcode.convert_if_needed('in.mp3', str(output), 1)
    assert calls == []
    assert output.read_bytes() == b'already converted'

def test_convert_if_needed_converts_missing_output(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(transcode, 'convert', lambda *args: calls.append(args))

    output = str(tmp_path / 'out.wav')
    assert transcode.convert_if_needed('in.mp3', output, 1)
    assert calls == [('in.mp3', output, 1)]

def test_error_message_uses_last_stderr_line():
    e = ffmpeg.Error('ffmpeg', b'', b'ffmpeg version x\nin.mp3: No such file or directory\n')
    assert transcode.error_message(e) == 'in.mp3: No such file or directory'

@needs_ffmpeg
def test_convert_trims_and_resamples(tmp_path, write_wav):
    source = write_wav(tmp_path / 'source.wav', 2.5, sample_rate=44100, channels=2)
    output = str(tmp_path / 'converted' / 'out.wav')
    transcode.convert(source, output, 1)

    assert transcode.get_duration(output) == pytest.approx(1.0, abs=0.05)
    stream = ffmpeg.probe(output)['streams'][0]
    assert stream['channels'] == 1
    assert int(stream['sample_rate']) == 16000

@needs_ffmpeg
def test_convert_strips_metadata(tmp_path, write_wav):
    plain = write_wav(tmp_path / 'plain.wav', 1.5)
    tagged = str(tmp_path / 'tagged.wav')
    (ffmpeg
        .input(plain)
        .output(tagged, metadata='title=hello world')
        .overwrite_output()
        .run(capture_stdout=True, capture_stderr=True))
    assert ffmpeg.probe(tagged)['format'].get('tags', {}).get('title') == 'hello world'

    output = str(tmp_path / 'out.wav')
    transcode.convert(tagged, output, 1)
    assert 'title' not in ffmpeg.probe(output)['format'].get('tags', {})

@needs_ffmpeg
def test_convert_missing_input_raises(tmp_path):
    with pytest.raises(ffmpeg.Error):
        transcode.convert(str(tmp_path / 'missing.wav'), str(tmp_path / 'out.wav'), 1)
    assert not (tmp_path / 'out.wav').exists()

@needs_ffmpeg
def test_rerun_is_noop(tmp_path, write_wav):
    source = write_wav(tmp_path / 'source.wav', 1.5)
    output = str(tmp_path / 'out.wav')
    assert transcode.convert_if_needed(source, output, 1)
    with open(output, 'rb') as f:
        first = f.read()

    assert not transcode.convert_if_needed(source, output, 1)
    with open(output, 'rb') as f:
        assert f.read() == first
