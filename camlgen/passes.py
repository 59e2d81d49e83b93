"""Declaration passes - one root OCaml module each.

Each pass walks the native library's namespace in a fixed order, so every
type is declared (or imported from an earlier pass) before it is used.
"""

from .emitter import Emitter
from .natives import (
    BASIC_INPUT, BASIC_SNARKY_CONSTRAINT, CAML_BIGINT_256, CAML_CIRCUIT_GATE,
    CAML_FP, CAML_FP_CS, CAML_FP_SRS, CAML_FP_STATE, CAML_FP_VAR, CAML_FP_VECTOR,
    CAML_FQ, CAML_FQ_CS, CAML_FQ_SRS, CAML_FQ_STATE, CAML_FQ_VAR, CAML_FQ_VECTOR,
    CAML_G_PALLAS, CAML_G_VESTA, CAML_GROUP_AFFINE, CAML_GROUP_PROJECTIVE_PALLAS,
    CAML_GROUP_PROJECTIVE_VESTA, CAML_LOOKUP_COMMITMENTS, CAML_LOOKUP_EVALUATIONS,
    CAML_LOOKUP_INFO, CAML_LOOKUP_SELECTORS, CAML_LOOKUP_VERIFIER_INDEX,
    CAML_LOOKUPS_USED, CAML_OPENING_PROOF, CAML_ORACLES,
    CAML_PASTA_FP_PLONK_GATE_VECTOR, CAML_PASTA_FP_PLONK_INDEX,
    CAML_PASTA_FQ_PLONK_GATE_VECTOR, CAML_PASTA_FQ_PLONK_INDEX, CAML_PLONK_DOMAIN,
    CAML_PLONK_VERIFICATION_EVALS, CAML_PLONK_VERIFIER_INDEX, CAML_POLY_COMM,
    CAML_PROOF_EVALUATIONS, CAML_PROVER_COMMITMENTS, CAML_PROVER_PROOF,
    CAML_RANDOM_ORACLES, CAML_RECURSION_CHALLENGE, CAML_SCALAR_CHALLENGE, CAML_WIRE,
    CURR_OR_NEXT, EC_ADD_COMPLETE_INPUT, EC_ENDOSCALE_INPUT, ENDOSCALE_ROUND,
    ENDOSCALE_SCALAR_ROUND, FEATURE_FLAG, GATE_TYPE, KIMCHI_CONSTRAINT,
    LOOKUP_FEATURES, LOOKUP_PATTERN, LOOKUP_PATTERNS, POINT_EVALUATIONS,
    POSEIDON_INPUT, SCALE_ROUND,
)
from .type_mapper import BOOL, BYTES, INT, OPTION, STRING, UNIT
from .types import NativeFunction


def declare_externals(g: Emitter, prefix: str, names, signatures=None):
    """Declare ``prefix_<name>`` natives under their short foreign names.

    An entry is either a name or a ``(native suffix, foreign name)`` pair.
    ``signatures`` maps foreign names to ``(params, returns)``.
    """
    signatures = signatures or {}
    for entry in names:
        suffix, foreign = entry if isinstance(entry, tuple) else (entry, entry)
        params, returns = signatures.get(foreign, (None, None))
        g.declare_function(NativeFunction(f"{prefix}_{suffix}", params, returns), foreign)


# ══════════════════════════════════════════════════════════════
# Kimchi_types
# ══════════════════════════════════════════════════════════════

def kimchi_types(g: Emitter):
    for native, name in (
        (CAML_GROUP_AFFINE, "or_infinity"),
        (CAML_SCALAR_CHALLENGE, "scalar_challenge"),
        (CAML_RANDOM_ORACLES, "random_oracles"),
        (POINT_EVALUATIONS, "point_evaluations"),
        (CAML_LOOKUP_EVALUATIONS, "lookup_evaluations"),
        (CAML_PROOF_EVALUATIONS, "proof_evaluations"),
        (CAML_POLY_COMM, "poly_comm"),
        (CAML_RECURSION_CHALLENGE, "recursion_challenge"),
        (CAML_OPENING_PROOF, "opening_proof"),
        (CAML_LOOKUP_COMMITMENTS, "lookup_commitments"),
        (CAML_PROVER_COMMITMENTS, "prover_commitments"),
        (CAML_PROVER_PROOF, "prover_proof"),
        (CAML_WIRE, "wire"),
        (GATE_TYPE, "gate_type"),
        (LOOKUP_PATTERN, "lookup_pattern"),
        (LOOKUP_PATTERNS, "lookup_patterns"),
        (LOOKUP_FEATURES, "lookup_features"),
        (FEATURE_FLAG, "feature_flag"),
        (CAML_CIRCUIT_GATE, "circuit_gate"),
        (CURR_OR_NEXT, "curr_or_next"),
        (CAML_ORACLES, "oracles"),
    ):
        g.declare_type(native, name)

    with g.module("VerifierIndex"):
        with g.module("Lookup"):
            g.declare_type(CAML_LOOKUPS_USED, "lookups_used")
            g.declare_type(CAML_LOOKUP_INFO, "lookup_info")
            g.declare_type(CAML_LOOKUP_SELECTORS, "lookup_selectors")
            g.declare_type(CAML_LOOKUP_VERIFIER_INDEX, "t")
        g.declare_type(CAML_PLONK_DOMAIN, "domain")
        g.declare_type(CAML_PLONK_VERIFICATION_EVALS, "verification_evals")
        g.declare_type(CAML_PLONK_VERIFIER_INDEX, "verifier_index")


# ══════════════════════════════════════════════════════════════
# Pasta_bindings
# ══════════════════════════════════════════════════════════════

BIGINT_FUNCTIONS = [
    "of_numeral", "of_decimal_string", "num_limbs", "bytes_per_limb", "div",
    "compare", "print", "to_string", "test_bit", "to_bytes", "of_bytes", "deep_copy",
]

FIELD_FUNCTIONS = [
    "size_in_bits", "size", "add", "sub", "negate", "mul", "div", "inv",
    "square", "is_square", "sqrt", "of_int", "to_string", "of_string", "print",
    "copy", "mut_add", "mut_sub", "mut_mul", "mut_square", "compare", "equal",
    "random", "rng", "to_bigint", "of_bigint", "two_adic_root_of_unity",
    "domain_generator", "to_bytes", "of_bytes", "deep_copy",
]

CURVE_FUNCTIONS = [
    "one", "add", "sub", "negate", "double", "scale", "random", "rng",
    "endo_base", "endo_scalar", "to_affine", "of_affine", "of_affine_coordinates",
    ("affine_deep_copy", "deep_copy"),
]


def bigint_signatures(t):
    return {
        "of_numeral": ((STRING, INT, INT), t),
        "of_decimal_string": ((STRING,), t),
        "num_limbs": ((UNIT,), INT),
        "bytes_per_limb": ((UNIT,), INT),
        "div": ((t, t), t),
        "compare": ((t, t), INT),
        "print": ((t,), UNIT),
        "to_string": ((t,), STRING),
        "test_bit": ((t, INT), BOOL),
        "to_bytes": ((t,), BYTES),
        "of_bytes": ((BYTES,), t),
        "deep_copy": ((t,), t),
    }


def field_signatures(t, bigint=CAML_BIGINT_256):
    binary = ((t, t), t)
    unary = ((t,), t)
    in_place = ((t, t), UNIT)
    return {
        "size_in_bits": ((UNIT,), INT),
        "size": ((UNIT,), bigint),
        "add": binary,
        "sub": binary,
        "negate": unary,
        "mul": binary,
        "div": binary,
        "inv": ((t,), OPTION[t]),
        "square": unary,
        "is_square": ((t,), BOOL),
        "sqrt": ((t,), OPTION[t]),
        "of_int": ((INT,), t),
        "to_string": ((t,), STRING),
        "of_string": ((STRING,), t),
        "print": ((t,), UNIT),
        "copy": in_place,
        "mut_add": in_place,
        "mut_sub": in_place,
        "mut_mul": in_place,
        "mut_square": ((t,), UNIT),
        "compare": ((t, t), INT),
        "equal": ((t, t), BOOL),
        "random": ((UNIT,), t),
        "rng": ((INT,), t),
        "to_bigint": ((t,), bigint),
        "of_bigint": ((bigint,), t),
        "two_adic_root_of_unity": ((UNIT,), t),
        "domain_generator": ((INT,), t),
        "to_bytes": ((t,), BYTES),
        "of_bytes": ((BYTES,), t),
        "deep_copy": unary,
    }


def curve_signatures(t, base, scalar, affine):
    return {
        "one": ((UNIT,), t),
        "add": ((t, t), t),
        "sub": ((t, t), t),
        "negate": ((t,), t),
        "double": ((t,), t),
        "scale": ((t, scalar), t),
        "random": ((UNIT,), t),
        "rng": ((INT,), t),
        "endo_base": ((UNIT,), base),
        "endo_scalar": ((UNIT,), scalar),
        "to_affine": ((t,), affine),
        "of_affine": ((affine,), t),
        "of_affine_coordinates": ((base, base), t),
        "deep_copy": ((affine,), affine),
    }


def pasta_bindings(g: Emitter):
    with g.module("BigInt256"):
        g.declare_type(CAML_BIGINT_256, "t")
        declare_externals(g, "caml_bigint_256", BIGINT_FUNCTIONS,
                          bigint_signatures(CAML_BIGINT_256))

    for module, field, prefix in (
        ("Fp", CAML_FP, "caml_pasta_fp"),
        ("Fq", CAML_FQ, "caml_pasta_fq"),
    ):
        with g.module(module):
            g.declare_type(field, "t")
            declare_externals(g, prefix, FIELD_FUNCTIONS, field_signatures(field))

    for module, base, scalar, affine, projective, prefix in (
        ("Vesta", CAML_FQ, CAML_FP, CAML_G_VESTA, CAML_GROUP_PROJECTIVE_VESTA, "caml_vesta"),
        ("Pallas", CAML_FP, CAML_FQ, CAML_G_PALLAS, CAML_GROUP_PROJECTIVE_PALLAS, "caml_pallas"),
    ):
        with g.module(module):
            with g.module("BaseField"):
                g.declare_alias("t", base)
            with g.module("ScalarField"):
                g.declare_alias("t", scalar)
            with g.module("Affine"):
                g.declare_alias("t", affine)

            g.declare_type(projective, "t")
            declare_externals(g, prefix, CURVE_FUNCTIONS,
                              curve_signatures(projective, base, scalar, affine))


# ══════════════════════════════════════════════════════════════
# Kimchi_bindings
# ══════════════════════════════════════════════════════════════

FIELD_VECTOR_FUNCTIONS = ["create", "length", "emplace_back", "get", "set"]

GATE_VECTOR_FUNCTIONS = ["create", "add", "get", "len", "wrap", "digest"]

SRS_FUNCTIONS = [
    "create", "write", "read", "lagrange_commitment", "add_lagrange_basis",
    "commit_evaluations", "b_poly_commitment", "batch_accumulator_check",
    "batch_accumulator_generate", ("h", "urs_h"),
]

INDEX_FUNCTIONS = [
    "create", "max_degree", "public_inputs", "domain_d1_size", "domain_d4_size",
    "domain_d8_size", "read", "write",
]

VERIFIER_INDEX_FUNCTIONS = ["create", "read", "write", "shifts", "dummy", "deep_copy"]

ORACLES_FUNCTIONS = ["create", "dummy", "deep_copy"]

FP_PROOF_FUNCTIONS = [
    "create", "example_with_lookup", "example_with_ffadd", "example_with_xor",
    "example_with_rot", "example_with_foreign_field_mul", "example_with_range_check",
    "example_with_range_check0", "verify", "batch_verify", "dummy", "deep_copy",
]

FQ_PROOF_FUNCTIONS = ["create", "verify", "batch_verify", "dummy", "deep_copy"]


def field_vector_signatures(t, elt):
    return {
        "create": ((UNIT,), t),
        "length": ((t,), INT),
        "emplace_back": ((t, elt), UNIT),
        "get": ((t, INT), elt),
        "set": ((t, INT, elt), UNIT),
    }


def gate_vector_signatures(t, elt):
    return {
        "create": ((UNIT,), t),
        "add": ((t, elt), UNIT),
        "get": ((t, INT), elt),
        "len": ((t,), INT),
        "wrap": ((t, CAML_WIRE, CAML_WIRE), UNIT),
        "digest": ((INT, t), BYTES),
    }


def kimchi_bindings(g: Emitter):
    with g.module("FieldVectors"):
        for module, vector, field, prefix in (
            ("Fp", CAML_FP_VECTOR, CAML_FP, "caml_fp_vector"),
            ("Fq", CAML_FQ_VECTOR, CAML_FQ, "caml_fq_vector"),
        ):
            with g.module(module):
                g.declare_type(vector, "t")
                g.declare_alias("elt", field)
                declare_externals(g, prefix, FIELD_VECTOR_FUNCTIONS,
                                  field_vector_signatures(vector, field))

    with g.module("Protocol"):
        with g.module("Gates"):
            with g.module("Vector"):
                for module, vector, field, prefix in (
                    ("Fp", CAML_PASTA_FP_PLONK_GATE_VECTOR, CAML_FP, "caml_pasta_fp_plonk_gate_vector"),
                    ("Fq", CAML_PASTA_FQ_PLONK_GATE_VECTOR, CAML_FQ, "caml_pasta_fq_plonk_gate_vector"),
                ):
                    with g.module(module):
                        elt = CAML_CIRCUIT_GATE[field]
                        g.declare_type(vector, "t")
                        g.declare_alias("elt", elt)
                        declare_externals(g, prefix, GATE_VECTOR_FUNCTIONS,
                                          gate_vector_signatures(vector, elt))

        with g.module("SRS"):
            with g.module("Fp"):
                g.declare_type(CAML_FP_SRS, "t")
                with g.module("Poly_comm"):
                    g.declare_alias("t", CAML_POLY_COMM[CAML_GROUP_AFFINE[CAML_FP]])
                declare_externals(g, "caml_fp_srs", SRS_FUNCTIONS)

            with g.module("Fq"):
                g.declare_type(CAML_FQ_SRS, "t")
                declare_externals(g, "caml_fq_srs", SRS_FUNCTIONS)

        with g.module("Index"):
            for module, index, prefix in (
                ("Fp", CAML_PASTA_FP_PLONK_INDEX, "caml_pasta_fp_plonk_index"),
                ("Fq", CAML_PASTA_FQ_PLONK_INDEX, "caml_pasta_fq_plonk_index"),
            ):
                with g.module(module):
                    g.declare_type(index, "t")
                    declare_externals(g, prefix, INDEX_FUNCTIONS)

        with g.module("VerifierIndex"):
            for module, field, srs, curve, prefix in (
                ("Fp", CAML_FP, CAML_FP_SRS, CAML_G_VESTA, "caml_pasta_fp_plonk_verifier_index"),
                ("Fq", CAML_FQ, CAML_FQ_SRS, CAML_G_PALLAS, "caml_pasta_fq_plonk_verifier_index"),
            ):
                with g.module(module):
                    g.declare_alias("t", CAML_PLONK_VERIFIER_INDEX[field, srs, CAML_POLY_COMM[curve]])
                    declare_externals(g, prefix, VERIFIER_INDEX_FUNCTIONS)

        with g.module("Oracles"):
            for module, field, prefix in (
                ("Fp", CAML_FP, "fp_oracles"),
                ("Fq", CAML_FQ, "fq_oracles"),
            ):
                with g.module(module):
                    g.declare_alias("t", CAML_ORACLES[field])
                    declare_externals(g, prefix, ORACLES_FUNCTIONS)

        with g.module("Proof"):
            with g.module("Fp"):
                declare_externals(g, "caml_pasta_fp_plonk_proof", FP_PROOF_FUNCTIONS)
            with g.module("Fq"):
                declare_externals(g, "caml_pasta_fq_plonk_proof", FQ_PROOF_FUNCTIONS)


# ══════════════════════════════════════════════════════════════
# Snarky_bindings
# ══════════════════════════════════════════════════════════════

CVAR_FUNCTIONS = [
    "of_index_unsafe", "constant", "add", "negate", "scale", "sub", "to_constant",
]

CONSTRAINT_SYSTEM_FUNCTIONS = [
    "create", "add_legacy_constraint", "add_kimchi_constraint", "finalize",
    "digest", "get_rows_len", "set_primary_input_size", "get_primary_input_size",
    "get_prev_challenges", "set_prev_challenges", "finalize_and_get_gates",
    "compute_witness", "to_json",
]

STATE_FUNCTIONS = [
    "make", "add_legacy_constraint", "add_kimchi_constraint", "get_variable_value",
    "store_field_elt", "alloc_var", "has_witness", "as_prover", "set_as_prover",
    "eval_constraints", "next_auxiliary", "system", "finalize",
    "set_public_inputs", "get_private_inputs",
]


def snarky_bindings(g: Emitter):
    g.doc("The constraints exposed by Kimchi.")
    with g.module("Constraints"):
        g.doc("The legacy R1CS constraints.")
        g.declare_type(BASIC_SNARKY_CONSTRAINT, "r1cs")

        g.doc("The inputs to the different custom gates.")
        with g.module("Inputs"):
            g.declare_type(BASIC_INPUT, "generic")
            g.declare_type(POSEIDON_INPUT, "poseidon_input")
            g.declare_type(EC_ADD_COMPLETE_INPUT, "ec_add")
            g.declare_type(ENDOSCALE_ROUND, "ec_endoscale_round")
            g.declare_type(SCALE_ROUND, "ec_scale_round")
            g.declare_type(EC_ENDOSCALE_INPUT, "ec_endoscale")
            g.declare_type(ENDOSCALE_SCALAR_ROUND, "ec_endoscale_scalar_round")

        g.doc("The custom gates exposed by Kimchi.")
        g.declare_type(KIMCHI_CONSTRAINT, "kimchi")

    for module, var, cs, state, prefix in (
        ("Fp", CAML_FP_VAR, CAML_FP_CS, CAML_FP_STATE, "fp"),
        ("Fq", CAML_FQ_VAR, CAML_FQ_CS, CAML_FQ_STATE, "fq"),
    ):
        with g.module(module):
            with g.module("Cvar"):
                g.declare_type(var, "t")
                declare_externals(g, f"{prefix}_var", CVAR_FUNCTIONS)

            with g.module("Constraint_system"):
                g.declare_type(cs, "t")
                declare_externals(g, f"{prefix}_cs", CONSTRAINT_SYSTEM_FUNCTIONS)

            with g.module("State"):
                g.declare_type(state, "t")
                declare_externals(g, f"{prefix}_state", STATE_FUNCTIONS)
