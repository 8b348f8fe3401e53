# Shared constants

SAMPLING_RATE = 16000   # all clips are assumed to be 16 kHz mono
BACKGROUND_NOISE_DIR = '_background_noise_' # dataset directory that holds noise, not words

DATASET_URL = 'http://download.tensorflow.org/data/speech_commands_v0.01.tar.gz'
ARCHIVE_PATH = 'data/speech_commands_v0.01.tar.gz' # where the downloaded archive is saved
DATASET_DIR = 'data/speech_commands_v0.01'         # where the archive is extracted

CLASSES_FILE = 'data/classes.txt'   # list of classes used in training and prediction
CKPT_PATH = 'data/model.keras'      # where to save/load the trained model
