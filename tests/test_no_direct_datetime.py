import re
import unittest
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
SCANNED_DIRS = (ROOT / 'app', ROOT / 'scripts')
CLOCK_MODULE = Path('app/core/time_provider.py')

# createdAt stamps, print filenames and demo dates must all go through TimeProvider.
CLOCK_CALL = re.compile(r'\b(?:datetime\.(?:now|utcnow|today)|date\.today|time\.time)\(')


class NoDirectClockTests(unittest.TestCase):
    def test_clock_is_only_read_through_time_provider(self):
        violations = []
        for base in SCANNED_DIRS:
            for file_path in sorted(base.rglob('*.py')):
                relative = file_path.relative_to(ROOT)
                if relative == CLOCK_MODULE:
                    continue
                for line_no, line in enumerate(file_path.read_text(encoding='utf-8').splitlines(), start=1):
                    if CLOCK_CALL.search(line):
                        violations.append(f'{relative}:{line_no}: {line.strip()}')
        self.assertEqual(violations, [], 'Direct clock access found:\n' + '\n'.join(violations))


if __name__ == '__main__':
    unittest.main()
