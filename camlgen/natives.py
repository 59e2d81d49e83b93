"""Native entities exported by the Kimchi stubs library.

Only identities and generic arities are known here; the values behind
them never cross into the generator.
"""

from .types import NativeType

# ══════════════════════════════════════════════════════════════
# Proof system types (generic over field / curve representation)
# ══════════════════════════════════════════════════════════════

CAML_GROUP_AFFINE = NativeType("CamlGroupAffine", 1)
CAML_SCALAR_CHALLENGE = NativeType("CamlScalarChallenge", 1)
CAML_RANDOM_ORACLES = NativeType("CamlRandomOracles", 1)
POINT_EVALUATIONS = NativeType("PointEvaluations", 1)
CAML_LOOKUP_EVALUATIONS = NativeType("CamlLookupEvaluations", 1)
CAML_PROOF_EVALUATIONS = NativeType("CamlProofEvaluations", 1)
CAML_POLY_COMM = NativeType("CamlPolyComm", 1)
CAML_RECURSION_CHALLENGE = NativeType("CamlRecursionChallenge", 2)
CAML_OPENING_PROOF = NativeType("CamlOpeningProof", 2)
CAML_LOOKUP_COMMITMENTS = NativeType("CamlLookupCommitments", 1)
CAML_PROVER_COMMITMENTS = NativeType("CamlProverCommitments", 1)
CAML_PROVER_PROOF = NativeType("CamlProverProof", 2)

CAML_WIRE = NativeType("CamlWire")
GATE_TYPE = NativeType("GateType")
LOOKUP_PATTERN = NativeType("LookupPattern")
LOOKUP_PATTERNS = NativeType("LookupPatterns")
LOOKUP_FEATURES = NativeType("LookupFeatures")
FEATURE_FLAG = NativeType("FeatureFlag")
CAML_CIRCUIT_GATE = NativeType("CamlCircuitGate", 1)
CURR_OR_NEXT = NativeType("CurrOrNext")
CAML_ORACLES = NativeType("CamlOracles", 1)

CAML_LOOKUPS_USED = NativeType("CamlLookupsUsed")
CAML_LOOKUP_INFO = NativeType("CamlLookupInfo")
CAML_LOOKUP_SELECTORS = NativeType("CamlLookupSelectors", 1)
CAML_LOOKUP_VERIFIER_INDEX = NativeType("CamlLookupVerifierIndex", 1)
CAML_PLONK_DOMAIN = NativeType("CamlPlonkDomain", 1)
CAML_PLONK_VERIFICATION_EVALS = NativeType("CamlPlonkVerificationEvals", 1)
CAML_PLONK_VERIFIER_INDEX = NativeType("CamlPlonkVerifierIndex", 3)

# ══════════════════════════════════════════════════════════════
# Pasta fields and curves
# ══════════════════════════════════════════════════════════════

CAML_BIGINT_256 = NativeType("CamlBigInteger256")
CAML_FP = NativeType("CamlFp")
CAML_FQ = NativeType("CamlFq")
CAML_GROUP_PROJECTIVE_VESTA = NativeType("CamlGroupProjectiveVesta")
CAML_GROUP_PROJECTIVE_PALLAS = NativeType("CamlGroupProjectivePallas")

# Affine points are the generic affine group over the curve's base field
CAML_G_VESTA = CAML_GROUP_AFFINE[CAML_FQ]
CAML_G_PALLAS = CAML_GROUP_AFFINE[CAML_FP]

# ══════════════════════════════════════════════════════════════
# Protocol state (one per field)
# ══════════════════════════════════════════════════════════════

CAML_FP_VECTOR = NativeType("CamlFpVector")
CAML_FQ_VECTOR = NativeType("CamlFqVector")
CAML_PASTA_FP_PLONK_GATE_VECTOR = NativeType("CamlPastaFpPlonkGateVector")
CAML_PASTA_FQ_PLONK_GATE_VECTOR = NativeType("CamlPastaFqPlonkGateVector")
CAML_FP_SRS = NativeType("CamlFpSrs")
CAML_FQ_SRS = NativeType("CamlFqSrs")
CAML_PASTA_FP_PLONK_INDEX = NativeType("CamlPastaFpPlonkIndex")
CAML_PASTA_FQ_PLONK_INDEX = NativeType("CamlPastaFqPlonkIndex")

# ══════════════════════════════════════════════════════════════
# Snarky constraint system
# ══════════════════════════════════════════════════════════════

BASIC_SNARKY_CONSTRAINT = NativeType("BasicSnarkyConstraint", 1)
BASIC_INPUT = NativeType("BasicInput", 2)
POSEIDON_INPUT = NativeType("PoseidonInput", 1)
EC_ADD_COMPLETE_INPUT = NativeType("EcAddCompleteInput", 1)
ENDOSCALE_ROUND = NativeType("EndoscaleRound", 1)
SCALE_ROUND = NativeType("ScaleRound", 1)
EC_ENDOSCALE_INPUT = NativeType("EcEndoscaleInput", 1)
ENDOSCALE_SCALAR_ROUND = NativeType("EndoscaleScalarRound", 1)
KIMCHI_CONSTRAINT = NativeType("KimchiConstraint", 2)

CAML_FP_VAR = NativeType("CamlFpVar")
CAML_FQ_VAR = NativeType("CamlFqVar")
CAML_FP_CS = NativeType("CamlFpCS")
CAML_FQ_CS = NativeType("CamlFqCS")
CAML_FP_STATE = NativeType("CamlFpState")
CAML_FQ_STATE = NativeType("CamlFqState")
