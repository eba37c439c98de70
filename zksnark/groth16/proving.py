import time

# Groth16 proof: 3 group elements of ~32 bytes each plus encoding overhead
PROOF_SIZE_BYTES = 128


class Proof:

    def __init__(self, a, b, c, proof_size_bytes=PROOF_SIZE_BYTES, generated_at=None):
        self.a = a
        self.b = b
        self.c = c
        self.proof_size_bytes = proof_size_bytes
        self.generated_at = time.time() if generated_at is None else generated_at

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return (self.a, self.b, self.c) == (other.a, other.b, other.c)

    __hash__ = None

    def __repr__(self):
        return f"Proof(a={self.a}, b={self.b}, c={self.c})"


def proof_a(proving_key, r):
    return proving_key.field.add(proving_key.alpha, r)


def proof_b(proving_key, s):
    return proving_key.field.add(proving_key.beta, s)


def proof_c(proving_key, r, s):
    return proving_key.field.mul(r, s)


# The witness does not enter the proof's algebra in this simulation.
def create_proof(proving_key, r, s):
    return Proof(
        proof_a(proving_key, r),
        proof_b(proving_key, s),
        proof_c(proving_key, r, s),
    )
