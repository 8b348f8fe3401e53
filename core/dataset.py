# List the clips in the dataset, assign class ids, and build the lazy tf.data pipeline
# that turns clips into padded batches of spectrograms.

import logging
import math
import os
import random
from collections import namedtuple

import tensorflow as tf

from core import audio
from core import config as cfg
from core import constants

Clip = namedtuple('Clip', ['path', 'label', 'class_id'])

# return a list of (path, label) pairs for every wav file under root,
# where the label is the name of the directory containing the file
def list_files(root):
    if not os.path.isdir(root):
        raise FileNotFoundError(f'Dataset directory {root} not found')

    files = []
    for dir_path, dir_names, file_names in os.walk(root):
        dir_names[:] = [name for name in dir_names if name != constants.BACKGROUND_NOISE_DIR]
        for file_name in file_names:
            if file_name.lower().endswith('.wav'):
                files.append((os.path.join(dir_path, file_name), os.path.basename(dir_path)))

    return sorted(files)

# return the sorted list of distinct labels
def get_class_names(labels):
    return sorted(set(labels))

# return class ids for the given labels, as a dense zero-based encoding of class_names
def encode_labels(labels, class_names=None):
    if class_names is None:
        class_names = get_class_names(labels)

    class_ids = {name: i for i, name in enumerate(class_names)}
    encoded = []
    for label in labels:
        if label not in class_ids:
            raise ValueError(f'Unknown class "{label}"')

        encoded.append(class_ids[label])

    return encoded

# return the list of clips under root, plus the class names;
# if class_names is given, clips are encoded against it instead of the labels found on disk
def list_clips(root, class_names=None):
    files = list_files(root)
    labels = [label for _, label in files]
    if class_names is None:
        class_names = get_class_names(labels)

    class_ids = encode_labels(labels, class_names)
    clips = [Clip(path, label, class_id) for (path, label), class_id in zip(files, class_ids)]
    logging.info(f'Found {len(clips)} clips in {len(class_names)} classes')
    return clips, class_names

# randomly split clips into training and validation lists
def split_clips(clips, train_portion=None, seed=None):
    if train_portion is None:
        train_portion = cfg.train_portion
    if seed is None:
        seed = cfg.seed

    indices = list(range(len(clips)))
    random.Random(seed).shuffle(indices)
    num_train = int(train_portion * len(clips))
    train_indices = sorted(indices[:num_train])
    val_indices = sorted(indices[num_train:])

    return [clips[i] for i in train_indices], [clips[i] for i in val_indices]

# number of batches needed to cover num_clips
def steps(num_clips, batch_size=None):
    if batch_size is None:
        batch_size = cfg.batch_size

    return math.ceil(num_clips / batch_size)

# return a dataset of (spectrogram, one-hot label) batches; spectrograms are computed lazily,
# and padded to a fixed number of chunks so every batch has the same shape
def make_dataset(clips, num_classes, batch_size=None, shuffle=True, repeat=False):
    if batch_size is None:
        batch_size = cfg.batch_size

    aud = audio.Audio()
    paths = [clip.path for clip in clips]
    class_ids = [clip.class_id for clip in clips]

    # explicit dtypes so an empty clip list still gives string paths
    ds = tf.data.Dataset.from_tensor_slices((tf.constant(paths, dtype=tf.string), tf.constant(class_ids, dtype=tf.int32)))
    if shuffle:
        ds = ds.shuffle(buffer_size=max(len(clips), 1), seed=cfg.seed, reshuffle_each_iteration=True)

    def _process(path, class_id):
        spec = aud.get_spectrogram(aud.decode(path))
        label = tf.one_hot(class_id, num_classes)
        return spec, label

    ds = ds.map(_process, num_parallel_calls=tf.data.AUTOTUNE, deterministic=not shuffle)
    ds = ds.padded_batch(batch_size, padded_shapes=(list(aud.spec_shape()), [num_classes]))
    if repeat:
        ds = ds.repeat()

    return ds.prefetch(tf.data.AUTOTUNE)
