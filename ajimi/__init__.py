"""
ajimi keeps a markdown book in sync with the git history of the code it
explains: regions between `ajimi::code` and `ajimi::end` markers are
regenerated from commit diffs, and the book's references are checked against
the history.

"""
