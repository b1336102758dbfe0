"""msgverify command-line interface"""
