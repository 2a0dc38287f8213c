"""コミットメッセージの取得元（ファイル・標準入力・gitの履歴）。"""

import logging
import subprocess
import sys
from collections.abc import Iterator
from pathlib import Path

from commitgate.models.errors import GitCommandError, MessageSourceError

logger = logging.getLogger(__name__)

# git commit -v で付与される区切り行。これ以降はdiffなのでメッセージに含めない
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def strip_comments(text: str) -> str:
    """gitのコメント行とscissors行以降を取り除く。"""
    lines: list[str] = []
    for line in text.splitlines():
        if line.startswith(SCISSORS_LINE):
            break
        if line.startswith("#"):
            continue
        lines.append(line)
    return "\n".join(lines) + "\n" if lines else ""


def read_message_file(path: Path | str, strip: bool = True) -> str:
    """commit-msgフックに渡されるメッセージファイルを読み込む。

    pathが "-" の場合は標準入力から読み込む。

    Raises:
        MessageSourceError: ファイルが存在しない、または読み込めない場合。
    """
    if str(path) == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise MessageSourceError(str(path), "file not found") from None
        except (OSError, UnicodeDecodeError) as e:
            raise MessageSourceError(str(path), str(e)) from e
    return strip_comments(text) if strip else text


class GitHistory:
    """ローカルリポジトリの履歴からコミットメッセージを取得する。"""

    def __init__(self, repo_dir: Path | None = None, git: str = "git") -> None:
        self._repo_dir = repo_dir
        self._git = git

    def _run(self, *args: str) -> str:
        """gitコマンドを実行し、標準出力を返す。

        Raises:
            GitCommandError: gitが見つからない、または終了コードが0以外の場合。
        """
        command = [self._git, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            proc = subprocess.run(
                command,
                cwd=self._repo_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError:
            raise GitCommandError(f"git executable not found: {self._git}", stderr="", exit_code=127) from None
        if proc.returncode != 0:
            raise GitCommandError(
                f"git {args[0]} failed: {proc.stderr.strip()}",
                stderr=proc.stderr,
                exit_code=proc.returncode,
            )
        return proc.stdout

    def rev_list(self, revision_range: str) -> list[str]:
        """リビジョン範囲に含まれるコミットハッシュを古い順に返す。"""
        output = self._run("rev-list", "--reverse", revision_range)
        return [line for line in output.splitlines() if line]

    def read_message(self, commit: str) -> str:
        """コミットのメッセージ全文を返す。"""
        return self._run("show", "-s", "--format=%B", commit)

    def iter_messages(self, commits: list[str]) -> Iterator[tuple[str, str]]:
        """(コミットハッシュ, メッセージ) を順に返す。"""
        for commit in commits:
            yield commit, self.read_message(commit)
