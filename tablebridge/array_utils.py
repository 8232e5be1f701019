"""Elementary array helpers. These are independent of the conversion core."""
import itertools

import numpy as np

from tablebridge.exceptions import CardinalityError


def value_range(values):
    """Return the spread between the largest and smallest value"""
    values = np.asarray(values)
    return values.max() - values.min()


def arange(start, end, step):
    """Evenly spaced values in ``[start, end)``, ``step`` apart"""
    return np.arange(start, end, step)


def linspace(start, end, n):
    """``n`` evenly spaced values from ``start`` to ``end`` inclusive"""
    return np.linspace(start, end, n)


def combinations(n, degree):
    """Return every combination of ``degree`` distinct indices below ``n``, one per row.

    Args:
        n (int): number of indices
        degree (int): size of each combination

    Returns:
        np.ndarray: array of shape (number of combinations, degree)
    """
    combos = list(itertools.combinations(range(n), degree))
    return np.array(combos, dtype=np.int64).reshape(len(combos), degree)


def identity_matrix(n):
    return np.identity(n, dtype=np.int64)


def arg_max(values):
    return int(np.argmax(values))


def arg_min(values):
    return int(np.argmin(values))


def shape(matrix):
    """Return the dimensions of a matrix given as an array or nested lists"""
    return list(np.shape(matrix))


def train_test_split(data, target, test_fraction, random_state=None):
    """Shuffle ``data`` and ``target`` together and split them into train and test sets.

    Args:
        data (sequence): Samples, indexed along the first axis.
        target (sequence): Targets, one per sample.
        test_fraction (float): Share of the samples placed in the test set, between 0 and 1.
        random_state (int, optional): Seed for the shuffle.

    Returns:
        dict: ``train_data``, ``train_target``, ``test_data`` and ``test_target``.
    """
    data = np.asarray(data)
    target = np.asarray(target)
    if len(data) != len(target):
        raise CardinalityError(
            f"data and target must have the same length, got {len(data)} and {len(target)}",
        )
    if not 0 <= test_fraction <= 1:
        raise ValueError(f"test_fraction must be between 0 and 1, got {test_fraction}")

    order = np.random.RandomState(random_state).permutation(len(data))
    n_test = int(round(test_fraction * len(data)))
    test, train = order[:n_test], order[n_test:]
    return {
        "train_data": data[train],
        "train_target": target[train],
        "test_data": data[test],
        "test_target": target[test],
    }
