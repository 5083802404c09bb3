from behave import given, when, then
import json
import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path

def find_project_root(start: Path) -> Path:
    cur = start
    for _ in range(10):
        if (cur / "pyproject.toml").exists() or (cur / "src").exists():
            return cur
        cur = cur.parent
    return start.parents[4]

PROJECT_ROOT = find_project_root(Path(__file__).resolve())
SRC_ENTRY = PROJECT_ROOT / "src" / "depinspect.py"

def _resolve_placeholder(val, context):
    # Map placeholders to paths inside the scenario's temp directory
    if val.startswith("<tmp_dir>"):
        return getattr(context, "tmp_dir") + val[len("<tmp_dir>"):]
    return val

def _tmp_dir(context):
    if not getattr(context, "tmp_dir", None):
        context.tmp_dir = tempfile.mkdtemp(prefix="di-e2e-")
        context.add_cleanup(shutil.rmtree, context.tmp_dir, True)
    return Path(context.tmp_dir)

@given('a lock file "{name}" containing:')
def step_lock_file(context, name):
    path = _tmp_dir(context) / "lock_files" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(context.text + "\n", encoding="utf-8")

@given("a registry file containing:")
def step_registry_file(context):
    (_tmp_dir(context) / "registry.json").write_text(context.text, encoding="utf-8")

@when("I run depinspect with arguments:")
def step_run_depinspect(context):
    args = []
    action_token = None

    for row in context.table:
        arg = row["arg"].strip()
        val = row["value"].strip()

        if arg.lower() in ("action", "<action>"):
            action_token = val
            continue

        # Interpret boolean flags passed as "true"
        if val.lower() == "true":
            args.append(arg)
        else:
            args.extend([arg, _resolve_placeholder(val, context)])

    cmd = [sys.executable, str(SRC_ENTRY)]
    if action_token:
        cmd.append(action_token)
    cmd.extend(args)

    env = os.environ.copy()
    env["PYTHONPATH"] = f"{PROJECT_ROOT / 'src'}:" + env.get("PYTHONPATH", "")

    context.proc = subprocess.run(
        cmd,
        cwd=str(_tmp_dir(context)),
        text=True,
        capture_output=True,
        env=env,
    )

@then("the process exits with code {code:d}")
def step_exit_code(context, code):
    assert context.proc.returncode == code, f"Expected {code}, got {context.proc.returncode}\nSTDOUT:\n{context.proc.stdout}\nSTDERR:\n{context.proc.stderr}"

@then('the JSON report "{path_key}" equals:')
def step_json_report_equals(context, path_key):
    path = Path(_resolve_placeholder(path_key, context))
    data = json.loads(path.read_text(encoding="utf-8"))
    expected = json.loads(context.text)
    assert data == expected, f"Expected {expected}, got {data}"

@then('no report exists at "{path_key}"')
def step_no_report(context, path_key):
    path = Path(_resolve_placeholder(path_key, context))
    assert not path.exists(), f"Unexpected report at {path}"

@then('stderr contains "{text}"')
def step_stderr_contains(context, text):
    assert text in context.proc.stderr, f"Expected {text!r} in stderr:\n{context.proc.stderr}"
