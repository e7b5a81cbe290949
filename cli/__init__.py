# StudentDir CLI Package
# ======================
# Interactive shell: session (command execution), renderer, REPL loop.
