"""Persistence of the best score across sessions."""

import logging
from pathlib import Path

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class BestScoreStore:
    """
    Best score kept in a file, as a decimal string.

    Parameters
    ----------
    directory : Path
        Directory holding the file. Created on the first save.
    key : str
        Fixed identifier used as the file name.
    """

    def __init__(self, directory: Path, key: str = '2048-infinite-best'):
        self.path = Path(directory) / key

    def load(self) -> int:
        """
        Read the stored best score.

        Returns
        -------
        int
            The stored score, or 0 when nothing valid is stored.
        """
        try:
            text = self.path.read_text(encoding='utf-8').strip()
        except FileNotFoundError:
            return 0
        except OSError:
            _logger.warning('Cannot read best score from %s, starting from 0', self.path, exc_info=True)
            return 0

        try:
            score = int(text, 10)
        except ValueError:
            _logger.warning('Corrupt best score %r in %s, starting from 0', text, self.path)
            return 0
        return max(score, 0)

    def save(self, score: int) -> None:
        """Write ``score`` as the best score. Failures are logged, play goes on."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(int(score)), encoding='utf-8')
        except OSError:
            _logger.exception('Cannot write best score %d to %s', score, self.path)
