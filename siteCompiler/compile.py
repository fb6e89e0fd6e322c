#!/usr/bin/env python3
"""
Site compiler: reads a site map snapshot and the site config, derives the
post graph and tag graph for every locale, and generates the static data
files and listing pages the site's graph view and category pages load.

Usage:
    python -m siteCompiler.compile -i site_map.json -c site.json -o www/
    python -m siteCompiler.compile -i site_map.json -c site.json -o www/ --plot
    python -m siteCompiler.compile -i site_map.json -c site.json -o www/ --locale en

All graph data is embedded as JS globals loaded via <script src> tags.
"""

import argparse
import json
import sys
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from siteGraph import (
    GraphData,
    GraphDataCache,
    RecordType,
    SiteConfig,
    SiteMap,
    TagGraphData,
    all_tags,
    build_post_graph,
    build_tag_graph,
    build_tag_graph_data,
    collect_posts,
    count_posts,
    load_site_config,
    load_site_map,
    resolve_locale,
    sort_posts_by_date,
    top_tags,
)

TEMPLATE_DIR = Path(__file__).parent / "templates"

THEME = {
    "background": "#eef1f4",
    "accent": "#8B5CF6",
}

LISTED_TYPES = (RecordType.CATEGORY, RecordType.DATABASE)


# ---------------------------------------------------------------------------
# Graph building
# ---------------------------------------------------------------------------

def build_graphs(
    site_map: SiteMap,
    config: SiteConfig,
    tag_data: TagGraphData,
    locales: list[str],
    cache: GraphDataCache,
) -> dict[str, dict[str, GraphData]]:
    """Build {locale: {"post": GraphData, "tag": GraphData}} through the cache."""
    graphs: dict[str, dict[str, GraphData]] = {}
    for locale in locales:
        post = cache.get_cached(
            f"post_{locale}",
            lambda locale=locale: build_post_graph(site_map, locale, config),
        )
        tag = cache.get_cached(
            f"tag_{locale}",
            lambda locale=locale: build_tag_graph(
                tag_data.locale(locale), config.translator(locale), locale,
            ),
        )
        graphs[locale] = {"post": post, "tag": tag}
        print(
            f"  {locale}: post graph {len(post.nodes)} nodes / {len(post.links)} edges, "
            f"tag graph {len(tag.nodes)} nodes / {len(tag.links)} edges",
            file=sys.stderr,
        )
    return graphs


# ---------------------------------------------------------------------------
# JS data export
# ---------------------------------------------------------------------------

def write_js_global(path: Path, name: str, data) -> None:
    """Write `var NAME = <compact json>;` to path."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"var {name} = ")
        json.dump(data, f, separators=(",", ":"), ensure_ascii=False)
        f.write(";\n")


def export_graph_js(output_dir: Path, kind: str, locale: str, graph: GraphData) -> None:
    """Write data/{kind}_graph_{locale}.js."""
    path = output_dir / "data" / f"{kind}_graph_{locale}.js"
    write_js_global(path, f"{kind.upper()}_GRAPH_DATA", graph.to_dict())
    print(
        f"  Wrote {path} ({len(graph.nodes)} nodes, {len(graph.links)} edges)",
        file=sys.stderr,
    )


def export_tag_summary_js(output_dir: Path, tag_data: TagGraphData) -> None:
    """Write data/tag_summary.js with every locale's tag summary."""
    path = output_dir / "data" / "tag_summary.js"
    write_js_global(path, "TAG_SUMMARY", tag_data.to_dict())
    print(f"  Wrote {path} ({len(tag_data.locales)} locales)", file=sys.stderr)


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

def iter_listed(items, depth: int = 0):
    """Yield (record, depth) for every category/database in the tree."""
    for item in items:
        if item.type in LISTED_TYPES:
            yield item, depth
        yield from iter_listed(item.children, depth + 1)


def category_listing(item, locale: str, default_locale: str) -> list:
    """Posts under a category in this locale, newest first."""
    posts = [p for p in collect_posts(item, default_locale) if p.language == locale]
    return sort_posts_by_date(posts)


# ---------------------------------------------------------------------------
# Plot
# ---------------------------------------------------------------------------

def plot_graphs(output_dir: Path, graphs: dict[str, dict[str, GraphData]]) -> None:
    """Render each graph as a PNG preview using its resolved colors and sizes."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import networkx as nx

    plot_dir = output_dir / "plots"
    plot_dir.mkdir(parents=True, exist_ok=True)

    for locale, kinds in sorted(graphs.items()):
        for kind, graph in sorted(kinds.items()):
            if not graph.nodes:
                continue
            g = nx.Graph()
            for node in graph.nodes:
                g.add_node(node.id, color=node.color, size=node.size, name=node.name)
            g.add_edges_from((link.source, link.target) for link in graph.links)

            fig, ax = plt.subplots(figsize=(14, 10))
            n = g.number_of_nodes()
            pos = nx.spring_layout(g, seed=42, k=2.0 / max(1, n ** 0.4), iterations=100)
            nodes_list = list(g.nodes())
            nx.draw_networkx_edges(g, pos, ax=ax, alpha=0.3, edge_color="#aaa", width=0.5)
            nx.draw_networkx_nodes(
                g, pos, ax=ax,
                node_color=[g.nodes[v]["color"] for v in nodes_list],
                node_size=[20 + 12 * g.nodes[v]["size"] for v in nodes_list],
                alpha=0.9,
            )
            # Label the ten largest nodes
            ranked = sorted(nodes_list, key=lambda v: -g.nodes[v]["size"])
            labels = {v: g.nodes[v]["name"][:24] for v in ranked[:10]}
            nx.draw_networkx_labels(g, pos, labels, ax=ax, font_size=7)

            ax.set_title(
                f"{kind} graph ({locale}): {g.number_of_nodes()} nodes, "
                f"{g.number_of_edges()} edges",
                fontsize=12,
            )
            ax.axis("off")
            fig.tight_layout()
            path = plot_dir / f"{kind}_{locale}.png"
            fig.savefig(str(path), dpi=150)
            plt.close(fig)
            print(f"  Wrote {path}", file=sys.stderr)


# ---------------------------------------------------------------------------
# CSS generation
# ---------------------------------------------------------------------------

def write_css(output_dir: Path) -> None:
    """Write the listing pages' stylesheet."""
    css = """\
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: __BACKGROUND__; color: #333; }

#site-header {
  display: flex; align-items: center; gap: 20px;
  height: 48px; padding: 0 16px;
  background: #fff; border-bottom: 1px solid #ddd;
}
.site-title { color: __ACCENT__; text-decoration: none; font-weight: 700; font-size: 16px; }
nav a { color: #666; text-decoration: none; font-size: 14px; margin-right: 12px; }
nav a:hover { color: #333; }

#content { max-width: 820px; margin: 0 auto; padding: 32px 24px; line-height: 1.6; }
#content h1 { font-size: 22px; margin-bottom: 8px; }
#content h2 { font-size: 17px; margin: 24px 0 10px; padding-bottom: 4px; border-bottom: 1px solid #eee; }
.meta { color: #999; font-size: 13px; margin-bottom: 16px; }

.post-list { list-style: none; }
.post-list li { padding: 10px 0; border-bottom: 1px solid #eee; }
.post-list a { color: #333; text-decoration: none; font-weight: 600; }
.post-list a:hover { color: __ACCENT__; }
.post-date { color: #999; font-size: 12px; margin-left: 8px; }
.post-desc { color: #666; font-size: 13px; }
.empty { color: #999; font-style: italic; }

.category-tree { list-style: none; }
.category-tree li { padding: 3px 0; font-size: 14px; }
.category-tree a { color: #333; text-decoration: none; }
.category-tree a:hover { color: __ACCENT__; }
.count-badge {
  display: inline-block; padding: 0 6px; margin-left: 4px;
  background: #e8e8e3; border-radius: 3px; font-size: 11px; color: #777;
}

.tag-list { display: flex; flex-wrap: wrap; gap: 6px; }
.tag-button {
  display: inline-block; padding: 3px 10px; border-radius: 12px;
  background: #fff; border: 1px solid #ddd; color: #333;
  font-size: 12px; text-decoration: none;
}
.tag-button:hover { border-color: __ACCENT__; }

.stats-table { border-collapse: collapse; font-size: 13px; margin-bottom: 16px; }
.stats-table th, .stats-table td { text-align: left; padding: 6px 12px; border-bottom: 1px solid #eee; }
.stats-table th { background: #f5f5f2; }
"""
    css = css.replace("__BACKGROUND__", THEME["background"])
    css = css.replace("__ACCENT__", THEME["accent"])
    path = output_dir / "assets" / "style.css"
    with open(path, "w") as f:
        f.write(css)
    print(f"  Wrote {path}", file=sys.stderr)


# ---------------------------------------------------------------------------
# HTML generation
# ---------------------------------------------------------------------------

def render_templates(
    output_dir: Path,
    site_map: SiteMap,
    config: SiteConfig,
    tag_data: TagGraphData,
    graphs: dict[str, dict[str, GraphData]],
) -> int:
    """Render Jinja2 templates to HTML files. Returns the page count."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    locales = list(graphs.keys())
    listed = list(iter_listed(site_map.navigation_tree))
    tree = [
        {"record": item, "depth": depth, "count": count_posts(item)}
        for item, depth in listed
    ]
    pages = 0

    # Index page
    stats = []
    for locale in locales:
        stats.append({
            "locale": locale,
            "post_nodes": len(graphs[locale]["post"].nodes),
            "post_links": len(graphs[locale]["post"].links),
            "tag_nodes": len(graphs[locale]["tag"].nodes),
            "tag_links": len(graphs[locale]["tag"].links),
            "top_tags": top_tags(tag_data, locale, config.default_locale, limit=10),
        })
    tpl = env.get_template("index.html")
    html = tpl.render(root="", theme=THEME, site=config, stats=stats, tree=tree)
    with open(output_dir / "index.html", "w", encoding="utf-8") as f:
        f.write(html)
    pages += 1
    print(f"  Wrote {output_dir / 'index.html'}", file=sys.stderr)

    # Per-category pages
    tpl = env.get_template("category.html")
    for item, _ in listed:
        slug = item.slug or item.id
        for locale in locales:
            posts = category_listing(item, locale, config.default_locale)
            html = tpl.render(
                root="../../",
                theme=THEME,
                site=config,
                locale=locale,
                category=item,
                posts=posts,
                t=config.translator(locale),
            )
            out_dir = output_dir / locale / "category"
            out_dir.mkdir(parents=True, exist_ok=True)
            with open(out_dir / f"{slug}.html", "w", encoding="utf-8") as f:
                f.write(html)
            pages += 1
    print(
        f"  Wrote {len(listed) * len(locales)} category pages",
        file=sys.stderr,
    )

    # All-tags pages
    tpl = env.get_template("all_tags.html")
    for locale in locales:
        summary = tag_data.locale(locale)
        tags = all_tags(tag_data, locale, config.default_locale)
        html = tpl.render(
            root="../",
            theme=THEME,
            site=config,
            locale=locale,
            tags=tags,
            counts=summary.tag_counts,
            t=config.translator(locale),
        )
        out_dir = output_dir / locale
        out_dir.mkdir(parents=True, exist_ok=True)
        with open(out_dir / "all-tags.html", "w", encoding="utf-8") as f:
            f.write(html)
        pages += 1
    print(f"  Wrote {len(locales)} all-tags pages", file=sys.stderr)
    return pages


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def compile_site(
    input_path: Path,
    config_path: Path,
    output_dir: Path,
    locales: list[str] | None = None,
    plot: bool = False,
) -> dict[str, dict[str, GraphData]]:
    """Run the whole build; returns the graphs that were written."""
    for d in ["", "data", "assets"]:
        (output_dir / d).mkdir(parents=True, exist_ok=True)

    print("Loading site data...", file=sys.stderr)
    site_map = load_site_map(input_path)
    config = load_site_config(config_path)
    if locales:
        locales = [resolve_locale(code, config.default_locale, config.locales) for code in locales]
        locales = list(dict.fromkeys(locales))
    else:
        locales = config.locales

    print("Summarizing tags...", file=sys.stderr)
    tag_data = build_tag_graph_data(site_map.page_info_map, config.default_locale)
    print(
        f"  {len(tag_data.locales)} locales with tagged posts "
        f"({tag_data.total_posts} records scanned)",
        file=sys.stderr,
    )

    print("Building graphs...", file=sys.stderr)
    cache = GraphDataCache()
    graphs = build_graphs(site_map, config, tag_data, locales, cache)

    print("Exporting data files...", file=sys.stderr)
    for locale, kinds in graphs.items():
        for kind, graph in kinds.items():
            export_graph_js(output_dir, kind, locale, graph)
    export_tag_summary_js(output_dir, tag_data)

    if plot:
        print("Plotting graphs...", file=sys.stderr)
        plot_graphs(output_dir, graphs)

    print("Rendering HTML pages...", file=sys.stderr)
    write_css(output_dir)
    n_pages = render_templates(output_dir, site_map, config, tag_data, graphs)

    print(
        f"\nDone! Site generated at {output_dir}/\n"
        f"  {len(locales)} locales, {n_pages} pages",
        file=sys.stderr,
    )
    return graphs


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compile a site map snapshot into graph data and listing pages."
    )
    parser.add_argument(
        "-i", "--input", type=Path, required=True,
        help="Site map snapshot JSON (pageInfoMap, databaseInfoMap, navigationTree)",
    )
    parser.add_argument(
        "-c", "--config", type=Path, required=True,
        help="Site config JSON (name, databaseIds, locale, labels)",
    )
    parser.add_argument(
        "-o", "--output", type=Path, required=True,
        help="Output directory for the generated site (e.g. www/)",
    )
    parser.add_argument(
        "--locale", action="append", default=None,
        help="Only build this locale (repeatable; default: every configured locale)",
    )
    parser.add_argument(
        "--plot", action="store_true",
        help="Also draw PNG previews of each graph",
    )
    args = parser.parse_args(argv)

    compile_site(args.input, args.config, args.output, args.locale, args.plot)


if __name__ == "__main__":
    main()
