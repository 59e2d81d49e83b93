import importlib.util
import io
from pathlib import Path

import pytest

from camlgen import (
    HEADER, PASSES, DuplicateDeclaration, NativeType, Pass, ScopeUnderflow,
    UnbalancedScope, UnknownPlaceholder, UnknownTarget, run_campaign, run_pass,
)
from camlgen.natives import CAML_FP, CAML_GROUP_AFFINE, CAML_PLONK_VERIFIER_INDEX
from camlgen.sink import Sink

ROOT = Path(__file__).resolve().parent.parent


def _lines(path):
    return path.read_text().splitlines()


@pytest.fixture
def generated(tmp_path):
    paths = [tmp_path / f"{p.root.lower()}.ml" for p in PASSES]
    exports = run_campaign(paths)
    return dict(zip((p.root for p in PASSES), paths)), exports


def test_all_files_written(generated):
    paths, exports = generated
    assert list(exports) == ["Kimchi_types", "Pasta_bindings", "Kimchi_bindings", "Snarky_bindings"]
    for path in paths.values():
        assert _lines(path)[0] == HEADER


def test_kimchi_types(generated):
    paths, exports = generated
    lines = _lines(paths["Kimchi_types"])

    assert lines[1] == "type nonrec 't1 or_infinity"
    assert "type nonrec ('t1, 't2) prover_proof" in lines
    assert "type nonrec wire" in lines
    assert lines[-11:] == [
        "module VerifierIndex = struct",
        "  module Lookup = struct",
        "    type nonrec lookups_used",
        "    type nonrec lookup_info",
        "    type nonrec 't1 lookup_selectors",
        "    type nonrec 't1 t",
        "  end",
        "  type nonrec 't1 domain",
        "  type nonrec 't1 verification_evals",
        "  type nonrec ('t1, 't2, 't3) verifier_index",
        "end",
    ]
    binding = exports["Kimchi_types"][CAML_PLONK_VERIFIER_INDEX]
    assert (binding.path, binding.name, binding.arity) == (
        ("Kimchi_types", "VerifierIndex"), "verifier_index", 3,
    )


def test_pasta_bindings(generated):
    paths, _ = generated
    lines = _lines(paths["Pasta_bindings"])

    assert lines[1:4] == [
        "module BigInt256 = struct",
        "  type nonrec t",
        '  external of_numeral : string -> int -> int -> t = "caml_bigint_256_of_numeral"',
    ]
    assert '  external inv : t -> t option = "caml_pasta_fp_inv"' in lines
    assert '  external to_bigint : t -> BigInt256.t = "caml_pasta_fq_to_bigint"' in lines

    vesta = lines.index("module Vesta = struct")
    assert lines[vesta:vesta + 11] == [
        "module Vesta = struct",
        "  module BaseField = struct",
        "    type nonrec t = Fq.t",
        "  end",
        "  module ScalarField = struct",
        "    type nonrec t = Fp.t",
        "  end",
        "  module Affine = struct",
        "    type nonrec t = Fq.t Kimchi_types.or_infinity",
        "  end",
        "  type nonrec t",
    ]
    assert '  external scale : t -> Fp.t -> t = "caml_vesta_scale"' in lines
    assert '  external deep_copy : Fp.t Kimchi_types.or_infinity -> Fp.t Kimchi_types.or_infinity' \
        ' = "caml_pallas_affine_deep_copy"' in lines


def test_kimchi_bindings(generated):
    paths, _ = generated
    lines = _lines(paths["Kimchi_bindings"])

    assert lines[1:4] == [
        "module FieldVectors = struct",
        "  module Fp = struct",
        "    type nonrec t",
    ]
    assert "    type nonrec elt = Pasta_bindings.Fp.t" in lines
    assert '    external get : t -> int -> Pasta_bindings.Fq.t = "caml_fq_vector_get"' in lines
    assert "        type nonrec elt = Pasta_bindings.Fp.t Kimchi_types.circuit_gate" in lines
    assert "        type nonrec t = Pasta_bindings.Fp.t Kimchi_types.or_infinity Kimchi_types.poly_comm" in lines
    assert (
        "      type nonrec t = (Pasta_bindings.Fp.t, SRS.Fp.t, "
        "Pasta_bindings.Fq.t Kimchi_types.or_infinity Kimchi_types.poly_comm) "
        "Kimchi_types.VerifierIndex.verifier_index"
    ) in lines
    assert '      external urs_h : \'a = "caml_fp_srs_h"' in lines
    assert "      type nonrec t = Pasta_bindings.Fq.t Kimchi_types.oracles" in lines


def test_snarky_bindings(generated):
    paths, _ = generated
    lines = _lines(paths["Snarky_bindings"])

    assert lines[1:5] == [
        "(** The constraints exposed by Kimchi. *)",
        "module Constraints = struct",
        "  (** The legacy R1CS constraints. *)",
        "  type nonrec 't1 r1cs",
    ]
    assert "    type nonrec ('t1, 't2) generic" in lines
    assert '    external make : \'a = "fq_state_make"' in lines
    assert lines[-1] == "end"


def test_every_module_is_closed(generated):
    paths, _ = generated
    for path in paths.values():
        text = path.read_text()
        assert text.count(" = struct\n") == text.count("end\n")


def test_generation_is_deterministic(tmp_path, generated):
    paths, _ = generated
    again = [tmp_path / "again" / path.name for path in paths.values()]
    run_campaign(again)
    for first, second in zip(paths.values(), again):
        assert first.read_bytes() == second.read_bytes()


def test_stdout_wraps_root_modules():
    buffer = io.StringIO()
    run_campaign(stdout=buffer)
    text = buffer.getvalue()

    assert text.count(HEADER) == 4
    for spec in PASSES:
        assert f"{HEADER}\nmodule {spec.root} = struct\n" in text
    assert "  type nonrec 't1 or_infinity\n" in text
    assert text.endswith("end\n")


def test_mixed_file_and_stdout_destinations(tmp_path):
    buffer = io.StringIO()
    target = tmp_path / "pasta_bindings.ml"
    run_campaign(["-", target], stdout=buffer)

    assert target.exists()
    assert "module Kimchi_types = struct" in buffer.getvalue()
    assert "module Pasta_bindings = struct" not in buffer.getvalue()
    assert "module Snarky_bindings = struct" in buffer.getvalue()


def test_too_many_destinations():
    with pytest.raises(ValueError):
        run_campaign(["a", "b", "c", "d", "e"])


def test_passes_do_not_share_registries():
    exports = run_campaign(stdout=io.StringIO())
    assert CAML_FP not in exports["Kimchi_types"]
    assert CAML_GROUP_AFFINE not in exports["Pasta_bindings"]


def test_too_few_placeholders_abort():
    with pytest.raises(UnknownPlaceholder):
        run_campaign(stdout=io.StringIO(), placeholders=("T1", "T2"))


def test_failed_pass_aborts_campaign(tmp_path):
    def broken(g):
        g.declare_type(NativeType("A"), "t")
        g.declare_type(NativeType("B"), "t")

    reached = []
    campaign = (
        Pass("First", broken),
        Pass("Second", reached.append),
    )
    with pytest.raises(DuplicateDeclaration):
        run_campaign([tmp_path / "first.ml", tmp_path / "second.ml"], campaign=campaign)
    assert reached == []
    assert list(tmp_path.iterdir()) == []


def test_pass_without_import_cannot_reference_earlier_types():
    campaign = (PASSES[0], Pass("Pasta_bindings", PASSES[1].body))
    with pytest.raises(UnknownTarget, match="CamlGroupAffine"):
        run_campaign(stdout=io.StringIO(), campaign=campaign)


def test_body_leaving_module_open():
    def body(g):
        g.enter("Dangling")

    with pytest.raises(UnbalancedScope, match="Root.Dangling"):
        run_pass("Root", body, Sink(io.StringIO()))


def test_body_closing_root():
    with pytest.raises(ScopeUnderflow):
        run_pass("Root", lambda g: g.exit(), Sink(io.StringIO()))


def _load_cli():
    spec = importlib.util.spec_from_file_location("generate_stubs", ROOT / "bin" / "generate_stubs.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cli_writes_files(tmp_path, capsys):
    cli = _load_cli()
    paths = [tmp_path / f"{p.root.lower()}.ml" for p in PASSES]

    assert cli.main([str(p) for p in paths]) == 0
    err = capsys.readouterr().err
    for path in paths:
        assert path.exists()
        assert f"Generated: {path}" in err
    assert "Generation completed in" in err


def test_cli_reports_errors(capsys):
    cli = _load_cli()
    assert cli.main(["--placeholders", "1"]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_cli_rejects_extra_destinations():
    cli = _load_cli()
    with pytest.raises(SystemExit):
        cli.main(["a", "b", "c", "d", "e"])
