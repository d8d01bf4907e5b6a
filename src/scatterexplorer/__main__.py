"""Run with: python -m scatterexplorer"""
from scatterexplorer.main import main

if __name__ == "__main__":
    main()
