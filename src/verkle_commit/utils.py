import logging
import os
import time

from .constant import MAX_DERIVATION_ATTEMPTS

logger = logging.getLogger(__name__)


def get_n_jobs():
    """Get number of supported cores for multiprocessing if enabled"""
    check_env = os.environ.get("VERKLE_COMMIT_PARALLEL_CPU")
    if check_env:
        return int(check_env)
    else:
        return -1


def get_max_derivation_attempts():
    """Get the upper bound on hash-to-curve candidates tried during setup"""
    check_env = os.environ.get("VERKLE_COMMIT_MAX_DERIVATION_ATTEMPTS")
    if check_env:
        return int(check_env)
    else:
        return MAX_DERIVATION_ATTEMPTS


def split_list(data, n):
    """Split data into n chunks"""
    return [data[i : i + n] for i in range(0, len(data), n)]


def batch_modinv(a: list, m: int):
    """
    Compute modular inverse of `a[i]` over modulus `m` in batch
    """
    n = len(a)
    if n == 0:
        return []

    prefix_products = [1] * n

    for i in range(1, n):
        prefix_products[i] = (prefix_products[i - 1] * a[i - 1]) % m

    total_product = (prefix_products[-1] * a[-1]) % m

    total_inverse = pow(total_product, -1, m)

    inverses = [0] * n
    suffix_inverse = total_inverse
    for i in range(n - 1, -1, -1):
        inverses[i] = (suffix_inverse * prefix_products[i]) % m
        suffix_inverse = (suffix_inverse * a[i]) % m

    return inverses


class Timer:
    def __init__(self, name):
        self.start_time = 0
        self.end_time = 0
        self.elapsed = 0
        self.name = name

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.info("%s: %.3f seconds", self.name, self.elapsed)
