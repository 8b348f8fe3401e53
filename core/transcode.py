# Convert a recording to the format the model expects by piping it through ffmpeg three times:
# resample and downmix, trim to the requested length, then strip metadata.

import logging
import os

import ffmpeg

from core import config as cfg

# resample to mono at the model's rate and a low bitrate, returning wav bytes
def _resample(input_path):
    out, _ = (ffmpeg
        .input(input_path)
        .output('pipe:', format='wav', ac=cfg.convert_channels, audio_bitrate=cfg.convert_bitrate, ar=cfg.convert_rate)
        .run(capture_stdout=True, capture_stderr=True))

    return out

# keep the first length seconds of the wav bytes
def _trim(wav_bytes, length):
    out, _ = (ffmpeg
        .input('pipe:', format='wav')
        .output('pipe:', format='wav', ss=0, to=length)
        .run(input=wav_bytes, capture_stdout=True, capture_stderr=True))

    return out

# write the wav bytes to output_path without any metadata; streams are copied, not re-encoded
def _strip_metadata(wav_bytes, output_path):
    (ffmpeg
        .input('pipe:', format='wav')
        .output(output_path, map_metadata=-1, vcodec='copy', acodec='copy')
        .overwrite_output()
        .run(input=wav_bytes, capture_stdout=True, capture_stderr=True))

# convert input_path to output_path, trimmed to length seconds;
# raises ffmpeg.Error if any stage fails
def convert(input_path, output_path, length):
    logging.debug(f'Converting {input_path} to {output_path}')
    wav_bytes = _resample(input_path)
    wav_bytes = _trim(wav_bytes, length)

    dir_name = os.path.dirname(output_path)
    if len(dir_name) > 0 and not os.path.exists(dir_name):
        os.makedirs(dir_name)

    _strip_metadata(wav_bytes, output_path)

# convert unless output_path already exists; return True iff a conversion was done
def convert_if_needed(input_path, output_path, length):
    if os.path.exists(output_path):
        logging.info(f'Skipping {input_path} since {output_path} already exists')
        return False

    convert(input_path, output_path, length)
    return True

# return the duration of an audio file in seconds
def get_duration(path):
    info = ffmpeg.probe(path)
    return float(info['format']['duration'])

# return the last meaningful line of ffmpeg's error output
def error_message(e):
    if e.stderr is None:
        return str(e)

    tokens = e.stderr.decode(errors='replace').strip().split('\n')
    return tokens[-1] if len(tokens) > 0 else str(e)
