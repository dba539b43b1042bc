SUMMARY_MARKER = "<!--more-->"


def split_summary(body: str) -> tuple[str, str]:
    """Split a body at the first summary break; later markers stay in the remainder."""
    summary, marker, remainder = body.partition(SUMMARY_MARKER)
    if not marker:
        return body, ""
    return summary, remainder


def excerpt(post, words: int = 70) -> str:
    """
    Listing teaser for a post: the text before the summary break when there is
    one and it is not empty, otherwise the frontmatter description, otherwise the first `words`
    words of the body.
    """
    if post.has_summary_break and post.summary.strip():
        return post.summary.strip()
    if post.description:
        return post.description.strip()

    tokens = post.body.replace(SUMMARY_MARKER, " ").split()
    if len(tokens) <= words:
        return " ".join(tokens)
    return " ".join(tokens[:words]) + " …"
