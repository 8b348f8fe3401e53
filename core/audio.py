# Audio processing, especially decoding clips and returning spectrograms.

import logging
import math

import ffmpeg
import numpy as np
import tensorflow as tf

from core import config as cfg
from core import constants
from core import transcode

# return (window_size, stride, fft_size, n_chunks), with sizes in samples;
# n_chunks is the number of STFT frames in a clip of max_clip_seconds
def window_params(window_size_ms=None, window_stride_ms=None, sampling_rate=constants.SAMPLING_RATE):
    if window_size_ms is None:
        window_size_ms = cfg.window_size_ms
    if window_stride_ms is None:
        window_stride_ms = cfg.window_stride_ms

    window_size = int(sampling_rate * window_size_ms / 1000)
    stride = int(sampling_rate * window_stride_ms / 1000)
    fft_size = int(2 ** (math.floor(math.log2(window_size)) + 1))

    # count of window centers in [window_size / 2, clip_len - window_size / 2]
    clip_len = int(sampling_rate * cfg.max_clip_seconds)
    n_chunks = max(0, (clip_len - window_size) // stride + 1)

    return window_size, stride, fft_size, n_chunks

class Audio:
    def __init__(self):
        self.window_size, self.stride, self.fft_size, self.n_chunks = window_params()
        self.freq_bins = self.fft_size // 2 + 1
        self.signal = None

    # shape of one spectrogram as fed to the model
    def spec_shape(self):
        return (self.n_chunks, self.freq_bins, 1)

    # read a 16-bit PCM wav file and return a mono float32 signal in [-1, 1];
    # this only uses TensorFlow ops, so it can be called inside Dataset.map
    def decode(self, path):
        contents = tf.io.read_file(path)
        signal, _ = tf.audio.decode_wav(contents, desired_channels=1)
        signal = tf.squeeze(signal, axis=-1)
        return signal[:int(cfg.max_clip_seconds * constants.SAMPLING_RATE)]

    # return a log-magnitude spectrogram of shape (time chunks, frequency bins, 1);
    # the number of chunks depends on the signal length
    def get_spectrogram(self, signal):
        signal = tf.cast(signal, tf.float32)
        s = tf.signal.stft(signals=signal, frame_length=self.window_size, frame_step=self.stride, fft_length=self.fft_size)
        spec = tf.math.log(tf.abs(s) + cfg.log_offset)
        return tf.expand_dims(spec, axis=-1)

    # truncate or zero-pad a spectrogram to n_chunks, matching what padded_batch does in training
    def pad_spectrogram(self, spec):
        spec = np.asarray(spec)[:self.n_chunks]
        pad_amount = self.n_chunks - spec.shape[0]
        if pad_amount > 0:
            spec = np.pad(spec, ((0, pad_amount), (0, 0), (0, 0)), 'constant', constant_values=0)

        return spec.astype(np.float32)

    # load any audio format ffmpeg understands as a mono signal at the model's sampling rate;
    # return None if ffmpeg fails
    def load(self, path):
        self.signal = None

        try:
            scale = 1.0 / float(1 << ((16) - 1))
            bytes, _ = (ffmpeg
                .input(path)
                .output('-', format='s16le', acodec='pcm_s16le', ac=1, ar=f'{constants.SAMPLING_RATE}')
                .overwrite_output()
                .run(capture_stdout=True, capture_stderr=True, quiet=True))

            # convert byte array to float array, and then to a numpy array
            self.signal = scale * np.frombuffer(bytes, '<i2').astype(np.float32)
            self.signal = self.signal[:int(cfg.max_clip_seconds * constants.SAMPLING_RATE)]
        except ffmpeg.Error as e:
            logging.error(f'Caught exception in audio load: {transcode.error_message(e)}')

        logging.debug('Done loading audio file')
        return self.signal
