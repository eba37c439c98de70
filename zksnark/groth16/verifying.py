import time

# Stand-in for the pairing check e(A, B) = e(alpha, beta) * e(IC, gamma) * e(C, delta).
# The equation below has no binding to the statement and is not sound.


class VerificationResult:

    def __init__(self, valid, duration_ms):
        self.valid = valid
        self.duration_ms = duration_ms

    def __bool__(self):
        return self.valid

    def __repr__(self):
        return f"VerificationResult(valid={self.valid}, duration_ms={self.duration_ms:.3f})"


def lhs(proof, verification_key):
    return verification_key.field.mul(proof.a, proof.b)


def rhs(verification_key):
    F = verification_key.field
    return F.mul(
        F.mul(verification_key.alpha, verification_key.beta),
        F.mul(verification_key.gamma, verification_key.delta),
    )


def verify(proof, public_inputs, verification_key):
    start = time.perf_counter()
    valid = lhs(proof, verification_key) == rhs(verification_key)
    duration_ms = (time.perf_counter() - start) * 1000
    return VerificationResult(valid, duration_ms)
