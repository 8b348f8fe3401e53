# Predict classes for the validation clips with a trained model, and report accuracy
# and a confusion matrix.

import argparse
import csv
import logging
import os
import sys
import time

os.environ['TF_CPP_MIN_LOG_LEVEL'] = '2' # 1 = no info, 2 = no warnings, 3 = no errors

import numpy as np
import tensorflow as tf
from tensorflow import keras

from core import config as cfg
from core import constants
from core import dataset
from core import plot
from core import util

# return the confusion matrix (rows are actual, columns predicted) and the accuracy
def evaluate(class_ids, predicted_ids, num_classes):
    matrix = tf.math.confusion_matrix(class_ids, predicted_ids, num_classes=num_classes).numpy()
    total = matrix.sum()
    accuracy = np.trace(matrix) / total if total > 0 else 0
    return matrix, accuracy

# return the n most frequent (actual, predicted, count) errors in a confusion matrix
def most_confused(matrix, class_names, n=5):
    errors = []
    for i in range(len(class_names)):
        for j in range(len(class_names)):
            if i != j and matrix[i][j] > 0:
                errors.append((class_names[i], class_names[j], int(matrix[i][j])))

    return sorted(errors, key=lambda error: error[2], reverse=True)[:n]

class Predictor:
    def __init__(self, dataset_dir=constants.DATASET_DIR, ckpt_path=constants.CKPT_PATH, classes_file=constants.CLASSES_FILE):
        self.class_names = util.get_class_list(classes_file)
        clips, _ = dataset.list_clips(dataset_dir, self.class_names)

        # same seed and portion as training, so these are the clips the model didn't train on
        _, self.clips = dataset.split_clips(clips)
        if len(self.clips) == 0:
            raise ValueError(f'No validation clips; the train portion is {cfg.train_portion}')

        self.model = keras.models.load_model(ckpt_path)

    # return the predicted class ids and their probabilities, in clip order
    def predict(self):
        ds = dataset.make_dataset(self.clips, len(self.class_names), shuffle=False, repeat=False)
        predictions = self.model.predict(ds, verbose=0)
        predicted_ids = np.argmax(predictions, axis=1)
        probabilities = np.max(predictions, axis=1)
        return predicted_ids, probabilities

    def run(self):
        logging.info(f'Predicting {len(self.clips)} validation clips')
        predicted_ids, probabilities = self.predict()
        class_ids = [clip.class_id for clip in self.clips]
        matrix, accuracy = evaluate(class_ids, predicted_ids, len(self.class_names))
        logging.info(f'Accuracy = {accuracy:.4f}')

        for actual, predicted, count in most_confused(matrix, self.class_names):
            logging.info(f'{actual} predicted as {predicted}: {count}')

        self.write_predictions(predicted_ids, probabilities)
        if cfg.verbosity > 0:
            if not os.path.exists(cfg.summary_dir):
                os.makedirs(cfg.summary_dir)

            plot.plot_confusion(matrix, self.class_names, f'{cfg.summary_dir}/confusion.png')

        return accuracy

    def write_predictions(self, predicted_ids, probabilities):
        dir_name = os.path.dirname(cfg.predictions_file)
        if len(dir_name) > 0 and not os.path.exists(dir_name):
            os.makedirs(dir_name)

        with open(cfg.predictions_file, 'w', newline='') as csv_file:
            writer = csv.writer(csv_file)
            writer.writerow(['path', 'class', 'class_pred', 'probability'])
            for clip, predicted_id, probability in zip(self.clips, predicted_ids, probabilities):
                writer.writerow([clip.path, clip.label, self.class_names[predicted_id], f'{probability:.4f}'])

        logging.info(f'Wrote {cfg.predictions_file}')

if __name__ == '__main__':

    # command-line arguments
    parser = argparse.ArgumentParser()
    parser.add_argument('-d', type=str, default=constants.DATASET_DIR, help=f'Dataset directory. Default = {constants.DATASET_DIR}.')
    parser.add_argument('-m', type=str, default=constants.CKPT_PATH, help=f'Path to trained model. Default = {constants.CKPT_PATH}.')
    parser.add_argument('-o', type=str, default=cfg.predictions_file, help=f'Output CSV file. Default = {cfg.predictions_file}.')
    parser.add_argument('-p', type=float, default=cfg.train_portion, help=f'Portion of clips used for training. Default = {cfg.train_portion}.')
    parser.add_argument('-v', type=int, default=cfg.verbosity, help=f'Verbosity (0 omits the confusion matrix plot). Default = {cfg.verbosity}.')
    args = parser.parse_args()

    cfg.predictions_file = args.o
    cfg.train_portion = args.p
    cfg.verbosity = args.v

    logging.basicConfig(level=logging.INFO, format='%(asctime)s.%(msecs)03d %(message)s', datefmt='%H:%M:%S')
    start_time = time.time()

    if not os.path.exists(args.m):
        logging.error(f'Error: model {args.m} not found; run train.py first')
        sys.exit(1)

    try:
        predictor = Predictor(dataset_dir=args.d, ckpt_path=args.m)
    except (FileNotFoundError, ValueError) as e:
        logging.error(f'Error: {e}')
        sys.exit(1)

    predictor.run()

    logging.info(f'Elapsed time = {util.format_elapsed(time.time() - start_time)}')
