"""
Test runner for the stablecov package.

Runs all tests and provides detailed validation report.
"""

import sys
import subprocess
from pathlib import Path


def run_command(cmd, description):
    """Run a command and return success status."""
    print(f"\n{'─'*60}")
    print(f"Running: {description}")
    print(f"{'─'*60}")

    try:
        result = subprocess.run(
            cmd,
            shell=True,
            capture_output=True,
            text=True,
            timeout=300  # 5 minute timeout
        )

        print(result.stdout)

        if result.returncode == 0:
            print(f"✅ {description} PASSED")
            return True
        else:
            print(f"❌ {description} FAILED")
            if result.stderr:
                print("Error output:")
                print(result.stderr)
            return False

    except subprocess.TimeoutExpired:
        print(f"⏱️  {description} TIMED OUT")
        return False
    except OSError as e:
        print(f"❌ {description} ERROR: {e}")
        return False


def main():
    """Run all tests."""
    print("="*60)
    print("STABLECOV TEST SUITE")
    print("="*60)

    results = {}

    # Run from the repository root
    repo_dir = Path(__file__).parent
    import os
    os.chdir(repo_dir)

    print(f"\nWorking directory: {Path.cwd()}")

    # Unit tests, one module at a time
    unit_tests = [
        ('Sampler Tests', 'tests/test_stable_sampler.py'),
        ('Inverse CDF Tests', 'tests/test_stable_inverse.py'),
        ('Fitter Tests', 'tests/test_stable_fit.py'),
        ('Wild Bootstrap Tests', 'tests/test_wild_bootstrap.py'),
        ('Coverage Tests', 'tests/test_coverage.py'),
        ('Threshold Search Tests', 'tests/test_threshold_search.py'),
        ('Logger Tests', 'tests/test_logger.py'),
    ]
    for name, path in unit_tests:
        results[name] = run_command(
            f"{sys.executable} -m pytest -q {path}",
            name
        )

    # Smoke test: minimal end-to-end sweep
    results['Smoke Tests'] = run_command(
        f"{sys.executable} tests/smoke_test.py",
        "End-to-End Smoke Tests"
    )

    # Print summary
    print("\n" + "="*60)
    print("TEST SUMMARY")
    print("="*60)

    total_tests = len(results)
    passed_tests = sum(1 for v in results.values() if v)

    for test_name, passed in results.items():
        status = "✅ PASSED" if passed else "❌ FAILED"
        print(f"{test_name:40s} {status}")

    print("\n" + "="*60)
    print(f"Results: {passed_tests}/{total_tests} tests passed")
    print("="*60)

    if passed_tests == total_tests:
        print("\n🎉 ALL TESTS PASSED!")
        print("\nNext steps:")
        print("  1. Install: pip install -e .[test]")
        print("  2. Run a sweep: python experiments/threshold_sweep.py --config config/threshold_sweep.yaml")
        return 0
    else:
        print("\n⚠️  SOME TESTS FAILED")
        print("\nPlease review the errors above and fix the failing tests.")
        print("Once all tests pass, you can run the sweep.")
        return 1


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
