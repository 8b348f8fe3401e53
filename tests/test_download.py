import io
import tarfile

import pytest
import requests

from core import download

class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.closed = True

    def raise_for_status(self):
        if self.status_code != 200:
            raise requests.HTTPError(f'{self.status_code} error')

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]

def test_download_writes_file(tmp_path, monkeypatch):
    requested = []
    response = FakeResponse(b'archive bytes')
    def fake_get(url, stream=False):
        requested.append(url)
        return response

    monkeypatch.setattr(download.requests, 'get', fake_get)
    path = tmp_path / 'data' / 'archive.tar.gz'
    assert download.download('http://example.com/archive.tar.gz', str(path))
    assert requested == ['http://example.com/archive.tar.gz']
    assert path.read_bytes() == b'archive bytes'
    assert not (tmp_path / 'data' / 'archive.tar.gz.part').exists()
    assert response.closed

def test_download_skips_existing(tmp_path, monkeypatch):
    def fake_get(url, stream=False):
        raise AssertionError('should not download')

    monkeypatch.setattr(download.requests, 'get', fake_get)
    path = tmp_path / 'archive.tar.gz'
    path.write_bytes(b'old')
    assert not download.download('http://example.com/archive.tar.gz', str(path))
    assert path.read_bytes() == b'old'

def test_download_http_error(tmp_path, monkeypatch):
    monkeypatch.setattr(download.requests, 'get', lambda url, stream=False: FakeResponse(b'', 404))
    path = tmp_path / 'archive.tar.gz'
    with pytest.raises(requests.HTTPError):
        download.download('http://example.com/archive.tar.gz', str(path))
    assert not path.exists()

def _make_archive(path):
    with tarfile.open(path, 'w:gz') as tar:
        data = b'RIFF'
        info = tarfile.TarInfo('yes/a.wav')
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))

def test_extract(tmp_path):
    archive = tmp_path / 'archive.tar.gz'
    _make_archive(archive)
    dest = tmp_path / 'dataset'
    assert download.extract(str(archive), str(dest))
    assert (dest / 'yes' / 'a.wav').read_bytes() == b'RIFF'

def test_extract_skips_existing(tmp_path):
    archive = tmp_path / 'archive.tar.gz'
    _make_archive(archive)
    dest = tmp_path / 'dataset'
    dest.mkdir()
    assert not download.extract(str(archive), str(dest))
    assert not (dest / 'yes').exists()
