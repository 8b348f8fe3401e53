# Plotting functions. Keep this separate from util.py since it imports libraries
# that most users don't need.

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

# save a plot of a training metric, with the validation metric if given
def plot_history(history, key1, path, key2=None):
    plt.clf() # clear any existing plot data
    plt.plot(history[key1])

    if key2 is not None and key2 in history:
        plt.plot(history[key2])
        plt.legend(['train', 'validation'], loc='upper left')
    else:
        plt.legend(['train'], loc='upper left')

    plt.title(key1)
    plt.ylabel(key1)
    plt.xlabel('epoch')
    plt.savefig(path)
    plt.close()

# save a heat map of a confusion matrix, with rows normalized to sum to 1
def plot_confusion(matrix, class_names, path):
    matrix = np.asarray(matrix, dtype=np.float32)
    totals = matrix.sum(axis=1, keepdims=True)
    normalized = np.divide(matrix, totals, out=np.zeros_like(matrix), where=totals > 0)

    size = max(6, len(class_names) / 3)
    plt.figure(figsize=(size, size))
    plt.imshow(normalized, cmap='Blues', vmin=0, vmax=1)
    plt.colorbar(fraction=0.046, pad=0.04)
    ticks = np.arange(len(class_names))
    plt.xticks(ticks, class_names, rotation=90)
    plt.yticks(ticks, class_names)
    plt.xlabel('predicted')
    plt.ylabel('actual')
    plt.tight_layout()
    plt.savefig(path)
    plt.close()

# save a plot of a spectrogram with time on the horizontal axis
def plot_spec(spec, path):
    spec = np.asarray(spec)
    if spec.ndim == 3:
        spec = spec.reshape(spec.shape[:2])

    plt.clf()
    plt.pcolormesh(spec.T, shading='gouraud')
    plt.xlabel('chunk')
    plt.ylabel('frequency bin')
    plt.savefig(path)
    plt.close()
