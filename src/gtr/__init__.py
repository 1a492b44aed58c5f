"""Git worktree runner: branch-scoped worktrees with config-driven defaults."""
