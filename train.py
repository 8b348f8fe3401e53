# Train a small CNN on spectrograms of the speech commands dataset.
# To see command-line arguments, run the script with -h argument.

import argparse
import logging
import os
import sys
import time

os.environ['TF_CPP_MIN_LOG_LEVEL'] = '3' # 1 = no info, 2 = no warnings, 3 = no errors

from tensorflow import keras

from core import audio
from core import config as cfg
from core import constants
from core import dataset
from core import plot
from core import util

from model import cnn
from model import model_checkpoint

class Trainer:
    def __init__(self, dataset_dir=constants.DATASET_DIR, ckpt_path=constants.CKPT_PATH, classes_file=constants.CLASSES_FILE):
        self.dataset_dir = dataset_dir
        self.ckpt_path = ckpt_path
        self.classes_file = classes_file
        self.out_dir = cfg.summary_dir
        self.init()

    # run training
    def run(self):
        start_time = time.time()

        if cfg.seed is not None:
            keras.utils.set_random_seed(cfg.seed)

        history = self.model.fit(self.train_ds, epochs=cfg.num_epochs, verbose=cfg.verbosity,
            steps_per_epoch=self.train_steps, validation_data=self.val_ds, validation_steps=self.val_steps,
            callbacks=self.callbacks)

        elapsed = util.format_elapsed(time.time() - start_time)
        logging.info(f'Elapsed time for training = {elapsed}')
        if os.path.exists(self.ckpt_path):
            logging.info(f'Saved model {self.ckpt_path} is {util.get_size_mb(self.ckpt_path):.1f} MB')

        if cfg.verbosity > 0:
            self.write_summary(history.history, elapsed)

        return history

    def write_summary(self, history, elapsed):
        with open(f'{self.out_dir}/summary.txt', 'w') as text_output:
            text_output.write(f'Classes: {len(self.class_names)}\n')
            text_output.write(f'Training clips: {len(self.train_clips)}\n')
            text_output.write(f'Validation clips: {len(self.val_clips)}\n')
            text_output.write(f'Batch size: {cfg.batch_size}\n')
            text_output.write(f'Epochs: {cfg.num_epochs}\n')

            if 'loss' in history:
                text_output.write(f"Training loss: {history['loss'][-1]:.3f}\n")
            if 'accuracy' in history:
                text_output.write(f"Training accuracy: {history['accuracy'][-1]:.3f}\n")
            if 'val_accuracy' in history:
                text_output.write(f"Final validation accuracy: {history['val_accuracy'][-1]:.3f}\n")
                text_output.write(f'Best validation accuracy: {self.model_checkpoint_callback.best_val_accuracy:.4f}\n')

            text_output.write(f'Elapsed time for training = {elapsed}\n')

        if 'loss' in history:
            plot.plot_history(history, 'loss', f'{self.out_dir}/loss.png', 'val_loss')
        if 'accuracy' in history:
            plot.plot_history(history, 'accuracy', f'{self.out_dir}/accuracy.png', 'val_accuracy')

    def create_model(self):
        logging.info('Create model')
        self.model = cnn.build_model(self.audio.spec_shape(), len(self.class_names))
        cnn.compile_model(self.model)

    # initialize
    def init(self):
        if cfg.seed is not None:
            keras.utils.set_random_seed(cfg.seed)

        self.audio = audio.Audio()
        clips, self.class_names = dataset.list_clips(self.dataset_dir)
        if len(clips) == 0:
            raise ValueError(f'No clips found in {self.dataset_dir}')

        util.save_class_list(self.class_names, self.classes_file)

        self.train_clips, self.val_clips = dataset.split_clips(clips)
        if len(self.train_clips) == 0:
            raise ValueError(f'No training clips; increase the train portion (currently {cfg.train_portion})')

        logging.info(f'# training clips: {len(self.train_clips)}, # validation clips: {len(self.val_clips)}')

        self.create_model()

        # create output directory
        if not os.path.exists(self.out_dir):
            os.makedirs(self.out_dir)

        if cfg.verbosity > 0:
            # output text and graphical descriptions of the model
            with open(f'{self.out_dir}/table.txt', 'w') as text_output:
                self.model.summary(print_fn=lambda x, **kwargs: text_output.write(x + '\n'))

            if cfg.verbosity >= 2:
                keras.utils.plot_model(self.model, show_shapes=True, to_file=f'{self.out_dir}/model.png')

        # initialize callbacks
        self.model_checkpoint_callback = model_checkpoint.ModelCheckpoint(self.ckpt_path, save_best_only=cfg.save_best_only)
        self.callbacks = [self.model_checkpoint_callback]

        # create the training and validation datasets; both repeat, so steps are given explicitly
        num_classes = len(self.class_names)
        self.train_steps = dataset.steps(len(self.train_clips))
        self.train_ds = dataset.make_dataset(self.train_clips, num_classes, shuffle=True, repeat=True)

        if len(self.val_clips) > 0:
            self.val_steps = dataset.steps(len(self.val_clips))
            self.val_ds = dataset.make_dataset(self.val_clips, num_classes, shuffle=False, repeat=True)
        else:
            self.val_steps = None
            self.val_ds = None

if __name__ == '__main__':

    # command-line arguments
    parser = argparse.ArgumentParser()
    parser.add_argument('-b', type=int, default=cfg.batch_size, help=f'Batch size. Default = {cfg.batch_size}.')
    parser.add_argument('-d', type=str, default=constants.DATASET_DIR, help=f'Dataset directory. Default = {constants.DATASET_DIR}.')
    parser.add_argument('-e', type=int, default=cfg.num_epochs, help=f'Number of epochs. Default = {cfg.num_epochs}.')
    parser.add_argument('-p', type=float, default=cfg.train_portion, help=f'Portion of clips used for training. Default = {cfg.train_portion}.')
    parser.add_argument('-r', type=float, default=cfg.learning_rate, help=f'Adadelta learning rate. Default = {cfg.learning_rate}.')
    parser.add_argument('-v', type=int, default=cfg.verbosity, help=f'Verbosity (0-2, 0 is minimal, 2 includes graph of model). Default = {cfg.verbosity}.')

    args = parser.parse_args()

    cfg.batch_size = args.b
    cfg.num_epochs = args.e
    cfg.train_portion = args.p
    cfg.learning_rate = args.r
    cfg.verbosity = args.v

    if args.b <= 0 or args.e <= 0:
        parser.error('batch size and epochs must be > 0')
    if not 0 < args.p <= 1:
        parser.error('train portion must be in (0, 1]')

    logging.basicConfig(level=logging.INFO, format='%(asctime)s.%(msecs)03d %(message)s', datefmt='%H:%M:%S')

    try:
        trainer = Trainer(dataset_dir=args.d)
    except (FileNotFoundError, ValueError) as e:
        logging.error(f'Error: {e}')
        sys.exit(1)

    trainer.run()
