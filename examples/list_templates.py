#!/usr/bin/env python
"""Print the game template catalog"""
from game_dev_mcp.services.template_catalog import list_bundles


def main():
    for bundle in list_bundles():
        print(f"{bundle.game_type}: {bundle.name} ({bundle.difficulty})")
        print(f"  {bundle.description}")
        print(f"  Features: {', '.join(bundle.features)}")
        print(f"  Components: {', '.join(bundle.scaffold_components)}")
        print(f"  Input hook: {bundle.input_hook}\n")


if __name__ == "__main__":
    main()
