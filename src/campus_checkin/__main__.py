"""Campus check-in Bot 主入口"""

from campus_checkin.run import main


if __name__ == "__main__":
    main()
