import logging
import random

from verkle_commit.constant import PEDERSEN_SEED, VECTOR_WIDTH
from verkle_commit.crs import CRS
from verkle_commit.commitment import PedersenVectorCommitment
from verkle_commit.utils import Timer

logging.basicConfig(level=logging.INFO, format="%(message)s")


def run(n_updates):

    with Timer("Generator derivation") as t:
        crs = CRS(VECTOR_WIDTH, PEDERSEN_SEED)
    setup_time = t.elapsed

    scheme = PedersenVectorCommitment()
    scheme.setup(crs)

    vector = [random.randint(0, scheme.order - 1) for _ in range(VECTOR_WIDTH)]

    with Timer("Full commitment") as t:
        commitment = scheme.commit(vector)
    commit_time = t.elapsed

    with Timer(f"{n_updates} incremental updates") as t:
        for _ in range(n_updates):
            index = random.randrange(VECTOR_WIDTH)
            new_value = random.randint(0, scheme.order - 1)
            commitment = scheme.update(commitment, index, vector[index], new_value)
            vector[index] = new_value
    update_time = t.elapsed

    assert commitment == scheme.commit(vector)

    return setup_time, commit_time, update_time / n_updates


n_updates = [16, 64, 256]

results = []
for i in n_updates:
    results.append(run(i))


for i, result in enumerate(results):
    print(f"{n_updates[i]} updates")
    print("=" * 50)
    print("Setup time:", result[0])
    print("Commit time:", result[1])
    print("Update time (avg):", result[2])
    print()
