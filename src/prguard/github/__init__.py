"""GitHub integration: run context, REST client, file fetching and comments.

Runs as a GitHub Action on `pull_request` events. Reads the changed files of
the pull request and, when the policy is broken, leaves one comment.
"""
