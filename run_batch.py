"""
=============================================================================
Batch Processing Entry Point for Result Ledgers
=============================================================================

Main script to orchestrate the complete workflow:
1. Initialize database
2. Extract every ledger PDF in the input directory
3. Store ledgers, students and subjects in the database
4. Export students.json
5. Print per-ledger statistics

Usage:
    python run_batch.py [--input DIR] [--output DIR] [--db FILE] [--skip-export]

Examples:
    python run_batch.py
    python run_batch.py --input ledgers/ --output batch_output/
    python run_batch.py --db my_ledgers.db

Date: 2026-10-19
Version: 2.0
=============================================================================
"""

import argparse
import os
import sys
import traceback

from batch_processor import BatchLedgerProcessor
from config import Config
from export_utils import export_students_json, get_ledger_statistics
from extract_ledger import LedgerExtractor
from init_db import init_database
from pdf_processor import PdfTextConverter


def main(argv=None):
    """Main entry point for batch processing"""
    parser = argparse.ArgumentParser(
        description='Batch process result ledger PDFs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process all PDFs with default settings
  python run_batch.py

  # Specify custom directories
  python run_batch.py --input ledgers/ --output batch_output/

  # Use custom database file
  python run_batch.py --db custom_ledgers.db
        """
    )

    parser.add_argument(
        '--input',
        default='ledgers',
        help='Directory containing ledger PDF files (default: ledgers)'
    )

    parser.add_argument(
        '--output',
        default='batch_output',
        help='Output directory for logs and students.json (default: batch_output)'
    )

    parser.add_argument(
        '--db',
        default=Config.DATABASE_PATH,
        help=f'SQLite database file path (default: {Config.DATABASE_PATH})'
    )

    parser.add_argument(
        '--skip-export',
        action='store_true',
        help='Skip JSON export step'
    )

    args = parser.parse_args(argv)

    # Print header
    print()
    print("=" * 80)
    print(" " * 20 + "Result Ledger Records")
    print(" " * 20 + "Batch Processing System v2.0")
    print("=" * 80)
    print()

    print("Configuration:")
    print(f"  Input directory:   {args.input}")
    print(f"  Output directory:  {args.output}")
    print(f"  Database file:     {args.db}")
    print()

    if not os.path.exists(args.input):
        print(f"Error: Input directory not found: {args.input}")
        sys.exit(1)

    if not os.path.exists(args.output):
        os.makedirs(args.output)
        print(f"Created output directory: {args.output}")

    log_file = os.path.join(args.output, 'logs', 'batch_process.log')
    json_file = os.path.join(args.output, 'students.json')

    try:
        # Step 1: Initialize database
        print()
        print("-" * 80)
        print("Step 1: Initializing Database")
        print("-" * 80)
        session = init_database(args.db)
        print()

        # Step 2: Process PDFs
        print()
        print("-" * 80)
        print("Step 2: Extracting Ledgers")
        print("-" * 80)
        print()

        extractor = LedgerExtractor(
            default_result_date=Config.DEFAULT_RESULT_DATE,
            converter=PdfTextConverter(y_tolerance=Config.Y_TOLERANCE),
        )
        processor = BatchLedgerProcessor(
            input_dir=args.input,
            output_dir=args.output,
            db_session=session,
            extractor=extractor,
        )
        stats = processor.process_all_pdfs()

        # Step 3: Export JSON
        if not args.skip_export:
            print()
            print("-" * 80)
            print("Step 3: Exporting students.json")
            print("-" * 80)
            print()

            count = export_students_json(session, json_file)
            print(f"✓ Exported {count} records to {json_file}")

        # Step 4: Display statistics
        print()
        print("-" * 80)
        print("Step 4: Ledger Statistics")
        print("-" * 80)
        print()

        ledger_stats = get_ledger_statistics(session)

        if ledger_stats:
            print(f"Total ledgers: {len(ledger_stats)}")
            print()
            ledger_stats.sort(key=lambda x: x['total_students'], reverse=True)

            for i, stat in enumerate(ledger_stats[:10], 1):
                print(f"{i}. {stat['pdf_filename']}")
                print(f"   {stat['programme']} - {stat['examination_info']}")
                print(f"   Students: {stat['total_students']} (Pass: {stat['passed']}, "
                      f"Fail: {stat['failed']}, Pass%: {stat['pass_percentage']}%)")
                print()

        # Final summary
        print()
        print("=" * 80)
        print("BATCH PROCESSING COMPLETE")
        print("=" * 80)
        print()
        print(f"✓ PDFs processed:        {stats['pdfs_processed']}")
        print(f"✓ PDFs skipped:          {stats['pdfs_skipped']}")
        print(f"✓ Students extracted:    {stats['students_extracted']}")
        print(f"✓ Subjects extracted:    {stats['subjects_extracted']}")
        print(f"✓ Database records:      {stats['db_records_created']}")
        print()

        if stats['pdfs_failed'] > 0:
            print("⚠ Warnings:")
            print(f"  - {stats['pdfs_failed']} PDF(s) failed to process")
            print()
            print(f"Check logs in: {log_file}")
            print()

        print("=" * 80)
        print()
        print("Output files:")
        print(f"  - Database:      {os.path.abspath(args.db)}")
        if not args.skip_export:
            print(f"  - JSON export:   {os.path.abspath(json_file)}")
        print(f"  - Log file:      {log_file}")
        print()

        processor.close()
        session.close()

        print("✓ All done!")
        print()

    except KeyboardInterrupt:
        print()
        print()
        print("=" * 80)
        print("INTERRUPTED BY USER")
        print("=" * 80)
        print()
        print("Batch processing was interrupted. Some ledgers may have been stored.")
        print("It's safe to run the script again - stored ledgers will be skipped.")
        print()
        sys.exit(0)

    except Exception as e:
        print()
        print()
        print("=" * 80)
        print("ERROR")
        print("=" * 80)
        print()
        print(f"An error occurred: {e}")
        print()
        print("Traceback:")
        traceback.print_exc()
        print()

        sys.exit(1)


if __name__ == '__main__':
    main()
