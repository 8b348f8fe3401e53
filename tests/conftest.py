import os

os.environ['TF_CPP_MIN_LOG_LEVEL'] = '3'

import numpy as np
import pytest
import tensorflow as tf

# write a sine wave to a 16-bit wav file
def _write_wav(path, seconds, frequency=440, sample_rate=16000, channels=1):
    os.makedirs(os.path.dirname(str(path)), exist_ok=True)
    t = np.arange(int(seconds * sample_rate)) / sample_rate
    signal = (0.5 * np.sin(2 * np.pi * frequency * t)).astype(np.float32)
    samples = np.tile(signal[:, None], (1, channels))
    tf.io.write_file(str(path), tf.audio.encode_wav(samples, sample_rate))
    return str(path)

@pytest.fixture
def write_wav():
    return _write_wav

# a miniature dataset tree: one directory per word plus background noise
@pytest.fixture
def dataset_dir(tmp_path):
    root = tmp_path / 'speech_commands'
    _write_wav(root / 'yes' / 'a.wav', 1.0, frequency=300)
    _write_wav(root / 'yes' / 'b.wav', 0.8, frequency=320)
    _write_wav(root / 'no' / 'a.wav', 1.0, frequency=1200)
    _write_wav(root / 'no' / 'b.wav', 0.5, frequency=1250)
    _write_wav(root / 'up' / 'a.wav', 1.0, frequency=2500)
    _write_wav(root / 'up' / 'b.wav', 0.9, frequency=2600)
    _write_wav(root / '_background_noise_' / 'noise.wav', 2.0, frequency=50)
    (root / 'README.md').write_text('not audio')
    return str(root)
