# Classify your own recordings. Each audio file is first converted to a mono 16 kHz wav clip
# of the configured length (conversions that already exist are reused), then its
# spectrogram is passed to the trained model.

import argparse
import csv
import logging
import os
import sys
import time

os.environ['TF_CPP_MIN_LOG_LEVEL'] = '2' # 1 = no info, 2 = no warnings, 3 = no errors

import ffmpeg
import numpy as np
from tensorflow import keras

from core import audio
from core import config as cfg
from core import constants
from core import plot
from core import transcode
from core import util

class Prediction:
    def __init__(self, path, class_names, probs):
        self.path = path
        self.class_names = class_names
        self.probs = probs

    def __str__(self):
        matches = ', '.join(f'{name} ({prob:.3f})' for name, prob in zip(self.class_names, self.probs))
        return f'{os.path.basename(self.path)}: {matches}'

class Classifier:
    def __init__(self, input_path, output_path, convert=True, ckpt_path=constants.CKPT_PATH, classes_file=constants.CLASSES_FILE):
        self.input_path = input_path.strip()
        self.output_path = output_path.strip()
        self.convert = convert
        self.class_names = util.get_class_list(classes_file)
        self.audio = audio.Audio()
        self.model = keras.models.load_model(ckpt_path, compile=False)

    def _get_file_list(self):
        if os.path.isdir(self.input_path):
            return util.get_audio_files(self.input_path)
        elif util.is_audio_file(self.input_path):
            return [self.input_path]
        else:
            raise FileNotFoundError(f'{self.input_path} is not a directory or an audio file')

    # converted clips are cached, so the name keeps the source extension and the clip length
    # to avoid reusing a clip made from another file or trimmed to another length
    def converted_path(self, file_path):
        base, ext = os.path.splitext(os.path.basename(file_path))
        return os.path.join(cfg.converted_dir, f'{base}_{ext[1:].lower()}_{cfg.clip_seconds:g}s.wav')

    # return the signal for a file, converting it first if requested
    def _get_signal(self, file_path):
        if not self.convert:
            return self.audio.load(file_path)

        converted_path = self.converted_path(file_path)
        try:
            transcode.convert_if_needed(file_path, converted_path, cfg.clip_seconds)
        except ffmpeg.Error as e:
            logging.error(f'Error: unable to convert {file_path}: {transcode.error_message(e)}')
            return None

        return self.audio.decode(converted_path).numpy()

    # return a Prediction with the top_n classes for one file, or None if it can't be read
    def classify_file(self, file_path):
        signal = self._get_signal(file_path)
        if signal is None:
            return None

        spec = self.audio.pad_spectrogram(self.audio.get_spectrogram(signal))
        if cfg.verbosity >= 2:
            base, _ = os.path.splitext(os.path.basename(file_path))
            plot.plot_spec(spec, os.path.join(cfg.summary_dir, f'{base}.png'))

        probs = self.model.predict(np.expand_dims(spec, axis=0), verbose=0)[0]
        top = np.argsort(probs)[::-1][:cfg.top_n]
        return Prediction(file_path, [self.class_names[i] for i in top], [float(probs[i]) for i in top])

    def run(self):
        file_list = self._get_file_list()
        if cfg.verbosity >= 2 and not os.path.exists(cfg.summary_dir):
            os.makedirs(cfg.summary_dir)

        predictions = []
        for file_path in file_list:
            prediction = self.classify_file(file_path)
            if prediction is not None:
                logging.info(str(prediction))
                predictions.append(prediction)

        if len(self.output_path) > 0:
            self.write_predictions(predictions)

        return predictions

    def write_predictions(self, predictions):
        dir_name = os.path.dirname(self.output_path)
        if len(dir_name) > 0 and not os.path.exists(dir_name):
            os.makedirs(dir_name)

        with open(self.output_path, 'w', newline='') as csv_file:
            writer = csv.writer(csv_file)
            writer.writerow(['path', 'rank', 'class_pred', 'probability'])
            for prediction in predictions:
                for rank, (name, prob) in enumerate(zip(prediction.class_names, prediction.probs)):
                    writer.writerow([prediction.path, rank + 1, name, f'{prob:.4f}'])

        logging.info(f'Wrote {self.output_path}')

if __name__ == '__main__':

    # command-line arguments
    parser = argparse.ArgumentParser()
    parser.add_argument('-c', '--convert', type=int, default=1, help='1 = Convert recordings with ffmpeg before classifying them. Default = 1.')
    parser.add_argument('-i', '--input', type=str, default='', help='Input path (single audio file or directory). No default.')
    parser.add_argument('-l', '--length', type=float, default=cfg.clip_seconds, help=f'Seconds to keep from each recording. Default = {cfg.clip_seconds}.')
    parser.add_argument('-m', '--model', type=str, default=constants.CKPT_PATH, help=f'Path to trained model. Default = {constants.CKPT_PATH}.')
    parser.add_argument('-n', '--top', type=int, default=cfg.top_n, help=f'Number of top matches to report. Default = {cfg.top_n}.')
    parser.add_argument('-o', '--output', type=str, default='', help='Optional output CSV file.')
    parser.add_argument('-v', type=int, default=cfg.verbosity, help=f'Verbosity (2 saves a plot of each spectrogram). Default = {cfg.verbosity}.')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s.%(msecs)03d %(message)s', datefmt='%H:%M:%S')
    start_time = time.time()

    if args.length <= 0 or args.top <= 0:
        logging.error('Error: length and top must be > 0')
        sys.exit(1)

    cfg.clip_seconds = args.length
    cfg.top_n = args.top
    cfg.verbosity = args.v

    try:
        classifier = Classifier(args.input, args.output, convert=(args.convert == 1), ckpt_path=args.model)
        classifier.run()
    except (FileNotFoundError, ValueError) as e:
        logging.error(f'Error: {e}')
        sys.exit(1)

    logging.info(f'Elapsed time = {util.format_elapsed(time.time() - start_time)}')
