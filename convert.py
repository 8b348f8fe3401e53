# Convert a recording to a mono 16 kHz wav file of the given length, with metadata removed.
# Usage: python convert.py input output length

import argparse
import logging
import sys

import ffmpeg

from core import transcode

if __name__ == '__main__':

    # command-line arguments
    parser = argparse.ArgumentParser()
    parser.add_argument('input', type=str, help='Input audio file.')
    parser.add_argument('output', type=str, help='Output file.')
    parser.add_argument('length', type=str, help='Output length in seconds (or hh:mm:ss).')
    parser.add_argument('-s', '--skip', action='store_true', help='Skip conversion if the output file already exists.')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s.%(msecs)03d %(message)s', datefmt='%H:%M:%S')

    try:
        if args.skip:
            transcode.convert_if_needed(args.input, args.output, args.length)
        else:
            transcode.convert(args.input, args.output, args.length)
    except ffmpeg.Error as e:
        logging.error(f'Error: ffmpeg failed: {transcode.error_message(e)}')
        sys.exit(1)
