'''
this script checks all python scripts in src directory
it runs every script, detects pass/failure based on return code, and report that
test_all() asserts every script passed, so that it can also be collected by pytest
'''

import os
import sys
import glob
import subprocess


def run_all():
    all_fpaths = glob.glob(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src/*.py'))
    all_fpaths.sort()

    results = []
    for fpath in all_fpaths:
        completed = subprocess.run(
            [sys.executable, fpath], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        retcode = completed.returncode
        status = 'PASSED' if retcode == 0 else 'FAILED (%d)' % retcode
        bname = os.path.basename(fpath)
        print('%s: %s' % (bname, status))
        results.append((bname, retcode))
    return results


def test_all():
    results = run_all()
    assert len(results) > 0
    failed = [bname for bname, retcode in results if retcode != 0]
    assert failed == []


if __name__ == '__main__':
    run_all()
