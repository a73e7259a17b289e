import ast
from pathlib import Path


def test_no_print_statements():
    root = Path(__file__).resolve().parent.parent.parent
    sources = (
        list((root / "variant_shuffle").rglob("*.py"))
        + list((root / "scripts").rglob("*.py"))
        + [root / "main_app.py"]
    )
    offenders = []
    for path in sources:
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Call):
                func = node.func
                if isinstance(func, ast.Name) and func.id == "print":
                    offenders.append(str(path))
    assert not offenders, f"print() calls remain in: {offenders}"


def test_no_basicconfig():
    root = Path(__file__).resolve().parent.parent.parent
    offending = [
        str(path)
        for path in (root / "variant_shuffle").rglob("*.py")
        if "basicConfig(" in path.read_text(encoding="utf-8")
    ]
    assert not offending, f"logging.basicConfig used in: {offending}"
