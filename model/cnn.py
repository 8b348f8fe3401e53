# Small sequential CNN for classifying spectrograms of spoken words.

from tensorflow import keras

from core import config as cfg

# return an uncompiled model; input_shape is (time chunks, frequency bins, 1)
def build_model(input_shape, num_classes):
    model = keras.Sequential(name='speech_commands_cnn')
    model.add(keras.Input(shape=input_shape))

    for filters in cfg.conv_filters:
        model.add(keras.layers.Conv2D(filters, kernel_size=(cfg.kernel_size, cfg.kernel_size), activation='relu'))
        model.add(keras.layers.MaxPooling2D(pool_size=(cfg.pool_size, cfg.pool_size)))

    model.add(keras.layers.Dropout(cfg.conv_dropout))
    model.add(keras.layers.Flatten())
    model.add(keras.layers.Dense(cfg.dense_units, activation='relu'))
    model.add(keras.layers.Dropout(cfg.dense_dropout))
    model.add(keras.layers.Dense(num_classes, activation='softmax'))

    return model

def compile_model(model, learning_rate=None):
    if learning_rate is None:
        learning_rate = cfg.learning_rate

    opt = keras.optimizers.Adadelta(learning_rate=learning_rate)
    model.compile(loss=keras.losses.CategoricalCrossentropy(), optimizer=opt, metrics=['accuracy'])
    return model
