"""Root test configuration: on-disk blog fixtures shared by unit and integration tests"""

from pathlib import Path

import pytest


PROCESSES_POST = """\
---
layout: post
title: Elixir processes
comments: true
description: Spawning and linking processes in Elixir
keywords: elixir, processes, otp
---

Every Elixir process has its own mailbox.

```elixir
pid = spawn(fn -> IO.puts("hi") end)
```
"""

STREAMS_POST = """\
---
layout: post
title: Lazy streams
comments: true
keywords: elixir, streams
---

Streams compose without building intermediate lists.

{% highlight elixir %}
1..3 |> Stream.map(&(&1 * 2)) |> Enum.to_list()
{% endhighlight %}
"""

ABOUT_PAGE = """\
---
layout: page
title: About
permalink: /about/
---

I write about Elixir and Ruby.
"""


@pytest.fixture(name="make_site")
def make_site_fixture(tmp_path):
    """Return a helper writing {relative_path: text} files under a fresh site root."""
    def _make(files: dict[str, str], root: Path = None) -> Path:
        root = root or tmp_path / "site"
        for rel, text in files.items():
            dest = root / rel
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(text, encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        return root
    return _make


@pytest.fixture(name="site")
def site_fixture(make_site):
    """A small blog: two posts, an about page, and files that must be ignored."""
    return make_site({
        "_posts/2016-10-23-elixir-processes.md": PROCESSES_POST,
        "_posts/2016-12-24-lazy-streams.md": STREAMS_POST,
        "about.md": ABOUT_PAGE,
        "README.md": "---\ntitle: Readme\n---\n\nExcluded by name.\n",
        "notes.md": "# Plain markdown\n\nNo metadata block, so a static file.\n",
        "_drafts/2017-01-01-draft.md": "---\ntitle: Draft\n---\n\nNot published.\n",
        "_layouts/post.html": "<html>{{ content }}</html>",
    })
