from zksnark.field import DEFAULT_FIELD

# Simulated trusted setup. Real Groth16 derives elliptic-curve group elements
# from the QAP polynomials evaluated at tau; here the keys keep only the raw
# field elements and are not bound to the circuit's polynomials.


class ToxicWaste:

    def __init__(self, alpha, beta, gamma, delta, tau):
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma
        self.delta = delta
        self.tau = tau


class ProvingKey:

    def __init__(self, alpha, beta, delta, num_variables, num_constraints, field=None):
        self.alpha = alpha
        self.beta = beta
        self.delta = delta
        self.num_variables = num_variables
        self.num_constraints = num_constraints
        self.field = field if field is not None else DEFAULT_FIELD

    def __repr__(self):
        return (
            f"ProvingKey(num_variables={self.num_variables}, "
            f"num_constraints={self.num_constraints})"
        )


class VerificationKey:

    def __init__(self, alpha, beta, gamma, delta, num_variables, num_constraints, field=None):
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma
        self.delta = delta
        self.num_variables = num_variables
        self.num_constraints = num_constraints
        self.field = field if field is not None else DEFAULT_FIELD

    def __repr__(self):
        return (
            f"VerificationKey(num_variables={self.num_variables}, "
            f"num_constraints={self.num_constraints})"
        )


def generate_toxic_waste(field=None, rng=None):
    field = field if field is not None else DEFAULT_FIELD
    return ToxicWaste(
        alpha=field.random_element(rng),
        beta=field.random_element(rng),
        gamma=field.random_element(rng),
        delta=field.random_element(rng),
        tau=field.random_element(rng),
    )


def proving_key(waste, num_variables, num_constraints, field=None):
    return ProvingKey(waste.alpha, waste.beta, waste.delta,
                      num_variables, num_constraints, field)


def verification_key(waste, num_variables, num_constraints, field=None):
    return VerificationKey(waste.alpha, waste.beta, waste.gamma, waste.delta,
                           num_variables, num_constraints, field)


def derive_keys(waste, num_variables, num_constraints, field=None):
    return (
        proving_key(waste, num_variables, num_constraints, field),
        verification_key(waste, num_variables, num_constraints, field),
    )
