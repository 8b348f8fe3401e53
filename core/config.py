# spectrogram
window_size_ms = 30     # STFT window length in milliseconds
window_stride_ms = 10   # STFT hop length in milliseconds
log_offset = 0.01       # added to magnitudes before taking the log
max_clip_seconds = 1    # longer clips are truncated

# training
seed = 1
batch_size = 32
num_epochs = 10
train_portion = 0.7     # the rest is used for validation
learning_rate = 1.0     # Adadelta learning rate
conv_filters = [32, 64, 128, 256] # one conv/pool block per entry
kernel_size = 3
pool_size = 2
conv_dropout = 0.25     # dropout after the last conv block
dense_units = 128
dense_dropout = 0.5     # dropout before the output layer
save_best_only = True   # only checkpoint when val_accuracy improves
verbosity = 1           # 0 omits output graphs, 2 adds a graph of the model

# conversion of own recordings (ffmpeg)
convert_channels = 1
convert_bitrate = '26k'
convert_rate = '16k'
clip_seconds = 1        # converted recordings are trimmed to this length

# prediction
top_n = 3               # number of top matches to report per recording

# paths
data_dir = 'data'
summary_dir = 'summary'
converted_dir = 'data/converted'
predictions_file = 'summary/predictions.csv'
