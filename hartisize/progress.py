"""进度条显示"""

from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn


class RichProgressObserver:
    """使用 rich 进度条显示仓库处理进度"""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.progress = Progress(
            TextColumn("[green]🚀 {task.description}"),
            BarColumn(bar_width=None),
            MofNCompleteColumn(),
            console=console,
            expand=True,
        )
        self.task_id: Optional[TaskID] = None

    def on_start(self, total: int) -> None:
        self.progress.start()
        self.task_id = self.progress.add_task("", total=total)

    def on_repository_processed(self, name: str) -> None:
        if self.task_id is None:
            return
        self.progress.update(self.task_id, description=f"[yellow]{name}", advance=1)

    def on_finish(self) -> None:
        self.progress.stop()

    def close(self) -> None:
        """出错时也要停止进度条，恢复终端"""
        self.progress.stop()
