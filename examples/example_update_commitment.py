"""
Commit to a verkle node with 256 children through the byte-level API,
then change one child and update the commitment without recomputing it
"""

from verkle_commit import bindings
from verkle_commit.field import Fr

children = [Fr(0).to_bytes() for _ in range(256)]
commitment = bindings.commit(children)
print(f"Empty node: {commitment.hex()}")

# child 1 goes from 0 to 1
updated = bindings.update_commitment(1, Fr(0).to_bytes(), Fr(1).to_bytes(), commitment)

children[1] = Fr(1).to_bytes()
assert updated == bindings.commit(children)
print(f"Updated node: {updated.hex()}")
