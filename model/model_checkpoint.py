# Save the model when specified by the parameters.

import logging
import os

from tensorflow import keras

class ModelCheckpoint(keras.callbacks.Callback):
    def __init__(self, path, min_epochs=0, save_best_only=True):
        super().__init__()
        self.path = path
        self.min_epochs = min_epochs
        self.save_best_only = save_best_only
        self.saved_val_accuracy = 0
        self.best_val_accuracy = 0
        self.num_saves = 0

    def on_epoch_end(self, epoch, logs=None):
        logs = logs or {}
        val_accuracy = logs.get('val_accuracy', 0)

        # without validation data there is nothing to compare, so keep the latest weights
        if 'val_accuracy' in logs:
            improved = val_accuracy - self.saved_val_accuracy > .0001
        else:
            improved = True

        self.best_val_accuracy = max(val_accuracy, self.best_val_accuracy)

        if epoch >= self.min_epochs - 1 and (not self.save_best_only or improved or self.num_saves == 0):
            logging.info(f'Saving model checkpoint with val_accuracy = {val_accuracy:.4f}')

            dir_name = os.path.dirname(self.path)
            if len(dir_name) > 0 and not os.path.exists(dir_name):
                os.makedirs(dir_name)

            self.model.save(self.path)
            self.saved_val_accuracy = max(val_accuracy, self.saved_val_accuracy)
            self.num_saves += 1
