#!/usr/bin/env python3
"""
Prediction script for the language classifier.

Classifies text given as arguments or piped on standard input and prints
tab-separated records:

    echo "bonjour à tous" | python predict.py
    python predict.py -n -l fr,de,es,nl,en < lines.txt
"""
from langsniff.cli import main


if __name__ == '__main__':
    main()
