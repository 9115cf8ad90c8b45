#!/usr/bin/env python3
"""
EventControl 테스트 실행 스크립트

모듈/종류별 테스트 묶음을 골라 pytest로 실행합니다.

    python run_tests.py --type stores -v
"""

import argparse
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).parent

# 테스트 유형 -> pytest 대상
SUITES = {
    "all": ["tests/"],
    "unit": ["tests/unit/"],
    "integration": ["tests/test_persistence.py", "tests/test_scenarios.py", "tests/test_main.py"],
    "core": ["tests/unit/core/"],
    "common": ["tests/unit/common/"],
    "adapters": ["tests/unit/adapters/"],
    "stores": ["tests/unit/stores/"],
    "orchestrators": ["tests/unit/orchestrators/"],
    "observability": ["tests/unit/observability/"],
}


def build_command(suite, verbose=False, coverage=False, parallel=False):
    """pytest 명령 인자 목록 생성"""
    cmd = [sys.executable, "-m", "pytest"]
    if verbose:
        cmd.append("-v")
    if coverage:
        cmd += ["--cov=eventcontrol", "--cov-report=term-missing"]
    if parallel:
        cmd += ["-n", "auto"]
    return cmd + SUITES[suite]


def main():
    parser = argparse.ArgumentParser(description="EventControl 테스트 실행")
    parser.add_argument("--type", choices=sorted(SUITES), default="all", help="실행할 테스트 유형")
    parser.add_argument("-v", "--verbose", action="store_true", help="상세 출력")
    parser.add_argument("--coverage", action="store_true", help="코드 커버리지 포함 (pytest-cov)")
    parser.add_argument("--parallel", action="store_true", help="병렬 실행 (pytest-xdist)")
    args = parser.parse_args()

    cmd = build_command(args.type, args.verbose, args.coverage, args.parallel)
    print(f"[{args.type}] {' '.join(cmd[1:])}")

    code = subprocess.call(cmd, cwd=ROOT)
    print("성공" if code == 0 else f"실패 (exit {code})")
    sys.exit(code)


if __name__ == "__main__":
    main()
