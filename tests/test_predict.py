import numpy as np
import pytest

import predict

def test_evaluate():
    matrix, accuracy = predict.evaluate([0, 0, 1, 2, 2], [0, 1, 1, 2, 0], 3)
    assert matrix.tolist() == [[1, 1, 0], [0, 1, 0], [1, 0, 1]]
    assert accuracy == pytest.approx(0.6)

def test_evaluate_empty():
    matrix, accuracy = predict.evaluate([], [], 2)
    assert matrix.shape == (2, 2)
    assert accuracy == 0

def test_most_confused():
    matrix = np.array([[5, 3, 0], [1, 4, 0], [0, 7, 2]])
    errors = predict.most_confused(matrix, ['no', 'up', 'yes'], n=2)
    assert errors == [('yes', 'up', 7), ('no', 'up', 3)]

def test_predictor_needs_validation_clips(dataset_dir, tmp_path, monkeypatch):
    from core import config as cfg
    from core import util

    classes_file = str(tmp_path / 'classes.txt')
    util.save_class_list(['no', 'up', 'yes'], classes_file)
    monkeypatch.setattr(cfg, 'train_portion', 1.0)

    with pytest.raises(ValueError, match='No validation clips'):
        predict.Predictor(dataset_dir=dataset_dir, ckpt_path=str(tmp_path / 'missing.keras'), classes_file=classes_file)

def test_predictor_rejects_unknown_classes(dataset_dir, tmp_path):
    from core import util

    classes_file = str(tmp_path / 'classes.txt')
    util.save_class_list(['no', 'yes'], classes_file)

    with pytest.raises(ValueError, match='Unknown class'):
        predict.Predictor(dataset_dir=dataset_dir, ckpt_path=str(tmp_path / 'missing.keras'), classes_file=classes_file)
